"""Lambda function representation for Squirrel."""

from __future__ import annotations

from squirrel import Node, Value
from squirrel.errors import ArgumentError
from squirrel.types.environment import Environment
from squirrel.types.symbol import Symbol


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: tuple[Symbol, ...], body: Node, env: Environment):
        self.params: tuple[Symbol, ...] = tuple(params)
        self.body: Node = body
        # Shared with the defining scope, never copied
        self.env: Environment = env

    def bind(self, args: list[Value]) -> Environment:
        """Bind argument values to the formals in a fresh child of the closure env."""
        if len(args) != len(self.params):
            raise ArgumentError(
                f"lambda expects {len(self.params)} argument(s), got {len(args)}"
            )
        call_env = Environment(self.env)
        for param, arg in zip(self.params, args):
            call_env.define(param, arg)
        return call_env

    def __repr__(self) -> str:
        return f"<Lambda ({' '.join(str(p) for p in self.params)})>"
