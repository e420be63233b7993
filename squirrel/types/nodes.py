"""Compound AST nodes for Squirrel.

Atoms are plain Python values (float, bool, str) plus Symbol. The compound
nodes below hold their children in tuples and refuse attribute assignment,
so a parsed tree can be shared freely between evaluator, printer and codegen.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from squirrel import Value


class _Frozen:
    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key):
        raise AttributeError(f"{type(self).__name__} is immutable")


class List(_Frozen):
    """An ordered sequence of nodes.

    `vector` distinguishes `[a b]` from `(a b)`. The flag only affects how the
    list is evaluated as syntax and how it is rendered; two lists with the
    same elements but different flavors still compare equal.
    """

    __slots__ = ("elements", "vector")

    def __init__(self, elements: Iterable[Value] = (), vector: bool = False):
        object.__setattr__(self, "elements", tuple(elements))
        object.__setattr__(self, "vector", vector)

    @property
    def head(self) -> Value:
        return self.elements[0]

    @property
    def tail(self) -> tuple[Value, ...]:
        return self.elements[1:]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)

    def __getitem__(self, index):
        return self.elements[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, List) and _same_sequence(self.elements, other.elements)

    def __hash__(self) -> int:
        return hash(("List", self.elements))

    def __repr__(self) -> str:
        kind = "vector" if self.vector else "list"
        return f"List({list(self.elements)!r}, {kind})"


class DictionaryLiteral(_Frozen):
    """`{...}` as read: the raw entries, validated only when evaluated."""

    __slots__ = ("entries",)

    def __init__(self, entries: Iterable[Value] = ()):
        object.__setattr__(self, "entries", tuple(entries))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DictionaryLiteral) and _same_sequence(self.entries, other.entries)

    def __hash__(self) -> int:
        return hash(("DictionaryLiteral", self.entries))

    def __repr__(self) -> str:
        return f"DictionaryLiteral({list(self.entries)!r})"


class Dictionary(_Frozen):
    """An evaluated dictionary: string keys paired with values, in literal order."""

    __slots__ = ("pairs",)

    def __init__(self, pairs: Iterable[tuple[str, Value]] = ()):
        object.__setattr__(self, "pairs", tuple((k, v) for k, v in pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary) or len(self.pairs) != len(other.pairs):
            return False
        return all(
            ka == kb and same_value(va, vb)
            for (ka, va), (kb, vb) in zip(self.pairs, other.pairs)
        )

    def __hash__(self) -> int:
        return hash(("Dictionary", self.pairs))

    def __repr__(self) -> str:
        return f"Dictionary({list(self.pairs)!r})"


def same_value(a: Value, b: Value) -> bool:
    """Kind-aware equality: True is not 1.0 and a String is not a Symbol."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _same_sequence(a: tuple, b: tuple) -> bool:
    return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b))
