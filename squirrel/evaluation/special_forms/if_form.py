from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError, SquirrelTypeError
from squirrel.printer import to_string
from squirrel.types.environment import Environment


def if_form(
    tail: list[Node],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    if len(tail) != 3:
        raise ArgumentError("if requires a condition, a then-expression and an else-expression")

    cond = evaluate_fn(tail[0], env, budget)
    # No truthiness: only true and false select a branch
    if not isinstance(cond, bool):
        raise SquirrelTypeError(f"if condition must be a boolean, got {to_string(cond)}")

    return evaluate_fn(tail[1] if cond else tail[2], env, budget)
