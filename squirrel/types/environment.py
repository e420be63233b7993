"""Runtime environment for Squirrel.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via a `parent` link. Closures hold a reference to the
Environment they were created in, so a scope is shared, never copied: a
`set` made through one holder is seen by every other holder.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from squirrel import Value
from squirrel.errors import UnboundSymbolError
from squirrel.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[Symbol, Value] = {}
        self.parent: Environment | None = parent

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` to `value` in this scope, shadowing any outer binding."""
        self.vars[name] = value

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that owns `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.parent
        return None

    def get(self, name: Symbol) -> Value | None:
        """Return the nearest binding for `name`, or None when unbound."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def lookup_or_fail(self, name: Symbol) -> Value:
        """Return the nearest binding for `name`.

        Raises UnboundSymbolError if no scope in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(f"Cannot lookup unbound symbol {name}", str(name))
        return env.vars[name]

    def assign(self, name: Symbol, value: Value) -> None:
        """Update the existing binding for `name` in the scope that owns it.

        Never creates a binding. Raises UnboundSymbolError if the symbol is
        not bound anywhere in the chain.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(f"Cannot set unbound symbol {name}", str(name))
        env.vars[name] = value

    def update(self, mapping: Mapping[Symbol, Value]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.vars[k] = v

    def depth(self) -> int:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment depth={self.depth()} vars={len(self.vars)}>"
