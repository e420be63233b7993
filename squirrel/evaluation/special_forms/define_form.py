from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError, SquirrelTypeError
from squirrel.printer import to_string
from squirrel.types.environment import Environment
from squirrel.types.symbol import Symbol


def define_form(
    tail: list[Node],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    """
    (def name value)
    Binds in the current scope only and returns the bound value.
    """
    if len(tail) != 2:
        raise ArgumentError("def requires exactly 2 arguments: (def name value)")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise SquirrelTypeError(f"def first argument must be a symbol, got {to_string(name)}")
    value = evaluate_fn(val_expr, env, budget)
    env.define(name, value)
    return value
