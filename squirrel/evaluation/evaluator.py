"""Core evaluator for the Squirrel interpreter.

Direct recursion over the host stack: special forms are dispatched through
SPECIAL_FORMS, everything else non-empty in parentheses is an application.
The outermost `evaluate` turns a Python RecursionError into StackExhausted.
"""

from __future__ import annotations

import logging
import sys

from squirrel import Node, Value
from squirrel.config import get_max_call_depth
from squirrel.errors import (
    DictionaryArityError,
    DictionaryKeyError,
    SquirrelTypeError,
    StackExhausted,
)
from squirrel.evaluation.apply import apply
from squirrel.evaluation.special_forms import SPECIAL_FORMS
from squirrel.printer import to_string
from squirrel.types.environment import Environment
from squirrel.types.nodes import Dictionary, DictionaryLiteral, List
from squirrel.types.symbol import Symbol

logger = logging.getLogger(__name__)

# Upper bound on host frames spent per nested lambda call (body forms included)
FRAMES_PER_CALL = 50


def evaluate(expr: Node, env: Environment) -> Value:
    """
    Evaluate `expr` in `env`. Either returns the full value or raises; no
    partial result escapes.

    The host recursion limit is raised for the duration of the call so that
    the configured call depth, not Python, decides when recursion stops.
    """
    budget = get_max_call_depth()
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(limit + budget * FRAMES_PER_CALL)
    try:
        return evaluate0(expr, env, budget)
    except RecursionError:
        logger.debug("Python recursion limit reached during evaluation")
        raise StackExhausted("Maximum recursion depth exceeded") from None
    finally:
        sys.setrecursionlimit(limit)


def evaluate0(expr: Node, env: Environment, budget: int) -> Value:
    """
    Core evaluator: one node, with the remaining lambda call budget.
    """
    match expr:
        case Symbol():
            return env.lookup_or_fail(expr)
        case List(vector=True):
            return List([evaluate0(e, env, budget) for e in expr], vector=True)
        case List():
            return evaluate_application(expr, env, budget)
        case DictionaryLiteral():
            return evaluate_dictionary(expr, env, budget)

    # --- Atoms and runtime values return as-is ---
    return expr


def evaluate_application(expr: List, env: Environment, budget: int) -> Value:
    if not expr.elements:
        raise SquirrelTypeError("Cannot evaluate an empty list")

    head, *tail_args = expr.elements
    if isinstance(head, Symbol):
        # --- Special forms handling ---
        if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail_args, env, evaluate0, budget)
        fn = env.lookup_or_fail(head)
    elif isinstance(head, List) and not head.vector:
        # ((lambda (x) x) 1), ((do add) 1 2)
        fn = evaluate0(head, env, budget)
    else:
        raise SquirrelTypeError(
            f"A symbolic expression must begin with a symbol, got {to_string(head)}"
        )

    # Left to right: observable through print
    args = [evaluate0(arg, env, budget) for arg in tail_args]
    return apply(fn, args, evaluate0, budget)


def evaluate_dictionary(expr: DictionaryLiteral, env: Environment, budget: int) -> Dictionary:
    entries = expr.entries
    if len(entries) % 2 != 0:
        raise DictionaryArityError(
            f"Dictionary key {to_string(entries[-1])} has no value"
        )
    pairs: list[tuple[str, Value]] = []
    for i in range(0, len(entries), 2):
        key = entries[i]
        if not isinstance(key, str):
            raise DictionaryKeyError(f"Dictionary keys must be strings, got {to_string(key)}")
        pairs.append((key, evaluate0(entries[i + 1], env, budget)))
    return Dictionary(pairs)
