"""Application engine for Squirrel.

Centralizes function application for the evaluator:
- Lambdas get a fresh scope parented to their captured environment.
- Natives receive the already-evaluated argument list.
- Every lambda call spends one unit of the call budget; running out raises
  StackExhausted before the Python stack does.
"""

from squirrel import EvaluatorFn, Value
from squirrel.errors import SquirrelTypeError, StackExhausted
from squirrel.printer import to_string
from squirrel.types.lambda_fn import Lambda
from squirrel.types.native_fn import NativeFunction


def apply_lambda(
    fn: Lambda,
    args: list[Value],
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    """Apply a Lambda value.

    Parameters:
    - fn: The Lambda being applied.
    - args: The already-evaluated argument values.
    - evaluate_fn: Evaluator used for the body.
    - budget: Remaining lambda call depth.

    Raises ArgumentError on an arity mismatch and StackExhausted when the
    call budget is spent.
    """
    if budget <= 0:
        raise StackExhausted("Maximum call depth exceeded")
    call_env = fn.bind(args)
    return evaluate_fn(fn.body, call_env, budget - 1)


def apply(
    head: Value,
    args: list[Value],
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    """Apply either a Lambda or a NativeFunction; anything else is a type error."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn, budget)
    if isinstance(head, NativeFunction):
        return head(args)
    raise SquirrelTypeError(f"Cannot apply non-function {to_string(head)}")
