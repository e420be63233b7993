from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError
from squirrel.types.environment import Environment


def do_form(
    tail: list[Node],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    if not tail:
        raise ArgumentError("do requires at least 1 expression")
    for e in tail[:-1]:
        evaluate_fn(e, env, budget)
    return evaluate_fn(tail[-1], env, budget)
