"""Render JavaScript expression nodes to source text.

Every compound operand is wrapped in parentheses. Nothing relies on the
JavaScript precedence table, so `(pow (sub 0 2) 2)` can never turn into the
illegal `-2 ** 2`.
"""

from __future__ import annotations

import math

from squirrel.codegen.js_ast import (
    AnonymousFunction,
    ArrayLiteral,
    Assignment,
    BinaryOp,
    Call,
    Conditional,
    Identifier,
    JsNode,
    Literal,
    SequenceExpression,
)
from squirrel.printer import format_number, format_string


def _wrap(text: str, nested: bool) -> str:
    return f"({text})" if nested else text


def _literal(node: Literal, nested: bool) -> str:
    value = node.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return format_string(value)
    # format_number drops the sign of -0, which matters to division
    text = "-0" if value == 0 and math.copysign(1.0, value) < 0 else format_number(value)
    return _wrap(text, nested and text.startswith("-"))


def _emit(node: JsNode, nested: bool) -> str:
    match node:
        case Literal():
            return _literal(node, nested)
        case Identifier(name=name):
            return name
        case BinaryOp(op=op, left=left, right=right):
            return _wrap(f"{_emit(left, True)} {op} {_emit(right, True)}", nested)
        case ArrayLiteral(elements=elements):
            return "[" + ", ".join(_emit(e, True) for e in elements) + "]"
        case Call(callee=callee, args=args):
            return _emit(callee, True) + "(" + ", ".join(_emit(a, True) for a in args) + ")"
        case AnonymousFunction(params=params, body=body):
            return _wrap(f"({', '.join(params)}) => {_emit(body, True)}", nested)
        case SequenceExpression(expressions=expressions):
            # Always wrapped: a bare comma expression splits argument lists
            return "(" + ", ".join(_emit(e, True) for e in expressions) + ")"
        case Conditional(test=test, consequent=consequent, alternate=alternate):
            return _wrap(
                f"{_emit(test, True)} ? {_emit(consequent, True)} : {_emit(alternate, True)}",
                nested,
            )
        case Assignment(target=target, value=value):
            return _wrap(f"{_emit(target, True)} = {_emit(value, True)}", nested)
    raise TypeError(f"Cannot serialize {node!r}")


def serialize(node: JsNode) -> str:
    """Return JavaScript source for a single expression node."""
    return _emit(node, False)
