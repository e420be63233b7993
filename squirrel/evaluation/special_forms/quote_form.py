from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError
from squirrel.types.environment import Environment


def quote_form(
    tail: list[Node], env: Environment, evaluate_fn: EvaluatorFn, budget: int
) -> Value:
    if len(tail) != 1:
        raise ArgumentError("quote expects exactly 1 argument")
    return tail[0]
