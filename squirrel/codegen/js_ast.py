"""JavaScript expression nodes produced by the code generator.

Only expressions: a whole Squirrel program lowers to a single JavaScript
expression, with `def` scopes declared as parameters of an immediately
invoked arrow function.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class JsNode:
    __slots__ = ()


@dataclass(frozen=True)
class Literal(JsNode):
    value: Union[float, str, bool]


@dataclass(frozen=True)
class Identifier(JsNode):
    name: str


@dataclass(frozen=True)
class BinaryOp(JsNode):
    op: str
    left: JsNode
    right: JsNode


@dataclass(frozen=True)
class ArrayLiteral(JsNode):
    elements: tuple[JsNode, ...] = ()


@dataclass(frozen=True)
class Call(JsNode):
    callee: JsNode
    args: tuple[JsNode, ...] = ()


@dataclass(frozen=True)
class AnonymousFunction(JsNode):
    params: tuple[str, ...]
    body: JsNode


@dataclass(frozen=True)
class SequenceExpression(JsNode):
    expressions: tuple[JsNode, ...]


@dataclass(frozen=True)
class Conditional(JsNode):
    test: JsNode
    consequent: JsNode
    alternate: JsNode


@dataclass(frozen=True)
class Assignment(JsNode):
    target: Identifier
    value: JsNode
