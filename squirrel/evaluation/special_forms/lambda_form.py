from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError, SquirrelTypeError
from squirrel.printer import to_string
from squirrel.types.environment import Environment
from squirrel.types.lambda_fn import Lambda
from squirrel.types.nodes import List
from squirrel.types.symbol import Symbol


def lambda_params(params: Node) -> tuple[Symbol, ...]:
    """Validate a lambda parameter list.

    Either list flavor is accepted, so `(lambda [] body)` spells a
    zero-argument function (`()` does not parse).
    """
    if not isinstance(params, List):
        raise SquirrelTypeError(
            f"lambda first argument must be a list of symbols, got {to_string(params)}"
        )
    for p in params:
        if not isinstance(p, Symbol):
            raise SquirrelTypeError(
                f"lambda parameters must be symbols, got {to_string(p)}"
            )
    return tuple(params)


def lambda_form(
    tail: list[Node],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    if len(tail) != 2:
        raise ArgumentError("lambda requires a parameter list and a body: (lambda (params) body)")

    params, body = tail
    return Lambda(lambda_params(params), body, env)
