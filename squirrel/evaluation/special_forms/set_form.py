from squirrel import EvaluatorFn
from squirrel import Node, Value
from squirrel.errors import ArgumentError, SquirrelTypeError
from squirrel.printer import to_string
from squirrel.types.environment import Environment
from squirrel.types.symbol import Symbol


def set_form(
    tail: list[Node],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> Value:
    if len(tail) != 2:
        raise ArgumentError("set requires exactly 2 arguments: (set var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise SquirrelTypeError(f"set first argument must be a symbol, got {to_string(var_sym)}")
    value = evaluate_fn(val_expr, env, budget)
    # Mutates the owning scope; never introduces a binding
    env.assign(var_sym, value)
    return value
