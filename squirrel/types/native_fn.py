from __future__ import annotations

from typing import Callable, Optional

from squirrel import Value
from squirrel.errors import ArgumentError


class NativeFunction:
    """A host function over already-evaluated arguments.

    `arity` is the exact argument count, or None for variadic natives. When
    `min_args` is given it bounds variadic natives from below.
    """

    __slots__ = ("name", "fn", "arity", "min_args")

    def __init__(
        self,
        name: str,
        fn: Callable[[list[Value]], Value],
        arity: Optional[int] = None,
        min_args: int = 0,
    ):
        self.name = name
        self.fn = fn
        self.arity = arity
        self.min_args = min_args

    def __call__(self, args: list[Value]) -> Value:
        if self.arity is not None and len(args) != self.arity:
            raise ArgumentError(
                f"{self.name} expects {self.arity} argument(s), got {len(args)}"
            )
        if len(args) < self.min_args:
            raise ArgumentError(
                f"{self.name} expects at least {self.min_args} argument(s), got {len(args)}"
            )
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<native {self.name}>"
