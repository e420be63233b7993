"""Lower Squirrel syntax trees to JavaScript expression nodes.

The lowering works on the parsed tree, not on values: nothing is evaluated.

    number / string / boolean     -> Literal
    symbol                        -> Identifier (foo-bar -> foo_bar)
    (add a b) ... (gte a b)       -> BinaryOp
    add ... gte as a value        -> (a, b) => (a op b)
    (list ...) (vector ...) [...] -> ArrayLiteral
    (do e1 ... en)                -> SequenceExpression
    (if c t e)                    -> Conditional
    (def x v) (set x v)           -> Assignment
    (lambda (p ...) body)         -> AnonymousFunction
    (f a ...)                     -> Call

Names introduced by `def` are declared per scope (the program or a lambda
body) as the parameters of an immediately invoked arrow function, so the
output stays a single expression and closures come from JavaScript itself.
A name that already has a value in the enclosing scope (an outer binding or
an operator builtin) is passed in as the argument, so reads before the `def`
see that value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from squirrel import Node
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
from squirrel.errors import CodegenUnsupportedError
from squirrel.evaluation.special_forms.lambda_form import lambda_params
from squirrel.printer import to_string
from squirrel.types.nodes import DictionaryLiteral, List
from squirrel.types.symbol import Symbol

BINARY_OPERATORS: dict[str, str] = {
    "add": "+",
    "sub": "-",
    "mul": "*",
    "div": "/",
    "mod": "%",
    "pow": "**",
    "eq": "===",
    "neq": "!==",
    "lt": "<",
    "gt": ">",
    "lte": "<=",
    "gte": ">=",
}

ARRAY_BUILDERS = frozenset({"list", "vector"})

# Builtins with no JavaScript lowering
UNSUPPORTED_BUILTINS = frozenset({
    "length", "nth", "slice", "concat", "join", "parse-integer", "parse-float", "print",
})

SPECIAL_FORM_NAMES = frozenset({"def", "set", "do", "if", "lambda", "quote"})

RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    "arguments", "eval", "undefined", "NaN", "Infinity",
})


def mangle(name: str) -> str:
    """Map a Squirrel symbol name to a JavaScript identifier (injective)."""
    ident = name.replace("-", "_")
    return "$" + ident if ident in RESERVED_WORDS else ident


@dataclass(frozen=True)
class Scope:
    """Names bound by lambda parameters or `def` in enclosing scopes."""
    bound: frozenset[str] = frozenset()
    # Targets of `set` anywhere in the program
    assigned: frozenset[str] = frozenset()

    def with_names(self, names) -> Scope:
        return Scope(self.bound | frozenset(names), self.assigned)

    def is_builtin(self, name: str) -> bool:
        return name not in self.bound


def _form_targets(node: Node, form: str, nested: bool) -> Iterator[str]:
    """Symbols named by `(form sym value)`, skipping quoted data.

    Nested lambda bodies are searched only when `nested` is true.
    """
    if isinstance(node, List) and node.elements:
        head = node.head
        if not node.vector and isinstance(head, Symbol):
            if head.id == "quote" or (head.id == "lambda" and not nested):
                return
            if head.id == form and len(node) == 3 and isinstance(node[1], Symbol):
                yield node[1].id
        for child in node:
            yield from _form_targets(child, form, nested)
    elif isinstance(node, DictionaryLiteral):
        for child in node.entries:
            yield from _form_targets(child, form, nested)


def _initial_value(name: str, outer: Scope, toplevel: bool) -> Optional[JsNode]:
    """Value a `def`ined name holds before its `def` runs, or None if unbound."""
    if name in outer.bound:
        value: JsNode = Identifier(mangle(name))
    elif name in BINARY_OPERATORS:
        value = _operator_function(BINARY_OPERATORS[name])
    elif name in ARRAY_BUILDERS or name in UNSUPPORTED_BUILTINS:
        raise CodegenUnsupportedError(f"Cannot lower a definition of builtin {name}")
    else:
        return None
    # Before the def, `set` reaches the enclosing binding; the local copy would not
    if not toplevel and name in outer.assigned:
        raise CodegenUnsupportedError(
            f"Cannot lower a definition of {name} that shadows a reassigned binding"
        )
    return value


def _lower_scope(body: Node, params: tuple[str, ...], outer: Scope, toplevel: bool = False) -> JsNode:
    local_defs = [n for n in dict.fromkeys(_form_targets(body, "def", False)) if n not in params]
    initial = {n: _initial_value(n, outer, toplevel) for n in local_defs}
    scope = outer.with_names(params).with_names(local_defs)
    lowered = _lower(body, scope)
    if not local_defs:
        return lowered
    # Names with no enclosing value go last and start out undefined
    names = sorted(local_defs, key=lambda n: initial[n] is None)
    args = tuple(initial[n] for n in names if initial[n] is not None)
    return Call(AnonymousFunction(tuple(mangle(n) for n in names), lowered), args)


def _operator_function(op: str) -> AnonymousFunction:
    return AnonymousFunction(("a", "b"), BinaryOp(op, Identifier("a"), Identifier("b")))


def _lower_symbol(sym: Symbol, scope: Scope) -> JsNode:
    name = sym.id
    if scope.is_builtin(name):
        if name in BINARY_OPERATORS:
            return _operator_function(BINARY_OPERATORS[name])
        if name in ARRAY_BUILDERS or name in UNSUPPORTED_BUILTINS:
            raise CodegenUnsupportedError(f"Builtin {name} cannot be used as a value")
        if name in SPECIAL_FORM_NAMES:
            raise CodegenUnsupportedError(f"Special form {name} cannot be used as a value")
    return Identifier(mangle(name))


def _expect(name: str, tail: tuple, count: int) -> None:
    if len(tail) != count:
        raise CodegenUnsupportedError(
            f"{name} expects {count} argument(s), got {len(tail)}"
        )


def _lower_assignment(name: str, tail: tuple, scope: Scope) -> Assignment:
    _expect(name, tail, 2)
    target, value = tail
    if not isinstance(target, Symbol):
        raise CodegenUnsupportedError(f"{name} target must be a symbol, got {to_string(target)}")
    return Assignment(Identifier(mangle(target.id)), _lower(value, scope))


def _lower_special(name: str, tail: tuple, scope: Scope) -> JsNode:
    if name == "quote":
        _expect(name, tail, 1)
        quoted = tail[0]
        if isinstance(quoted, (bool, float, str)):
            return Literal(quoted)
        raise CodegenUnsupportedError(f"Cannot lower quoted data {to_string(quoted)}")
    if name == "do":
        if not tail:
            raise CodegenUnsupportedError("do requires at least 1 expression")
        if len(tail) == 1:
            return _lower(tail[0], scope)
        return SequenceExpression(tuple(_lower(e, scope) for e in tail))
    if name == "if":
        _expect(name, tail, 3)
        return Conditional(*(_lower(e, scope) for e in tail))
    if name in ("def", "set"):
        return _lower_assignment(name, tail, scope)
    # lambda
    _expect(name, tail, 2)
    params = tuple(p.id for p in lambda_params(tail[0]))
    return AnonymousFunction(tuple(mangle(p) for p in params), _lower_scope(tail[1], params, scope))


def _lower_application(node: List, scope: Scope) -> JsNode:
    head, tail = node.head, node.tail
    if isinstance(head, Symbol):
        name = head.id
        if name in SPECIAL_FORM_NAMES:
            return _lower_special(name, tail, scope)
        if scope.is_builtin(name):
            if name in BINARY_OPERATORS:
                _expect(name, tail, 2)
                left, right = (_lower(e, scope) for e in tail)
                return BinaryOp(BINARY_OPERATORS[name], left, right)
            if name in ARRAY_BUILDERS:
                return ArrayLiteral(tuple(_lower(e, scope) for e in tail))
            if name in UNSUPPORTED_BUILTINS:
                raise CodegenUnsupportedError(f"Builtin {name} has no JavaScript lowering")
        callee: JsNode = Identifier(mangle(name))
    elif isinstance(head, List) and not head.vector:
        callee = _lower(head, scope)
    else:
        raise CodegenUnsupportedError(
            f"A symbolic expression must begin with a symbol, got {to_string(head)}"
        )
    return Call(callee, tuple(_lower(e, scope) for e in tail))


def _lower(node: Node, scope: Scope) -> JsNode:
    match node:
        case bool() | float() | str():
            return Literal(node)
        case Symbol():
            return _lower_symbol(node, scope)
        case List(vector=True):
            return ArrayLiteral(tuple(_lower(e, scope) for e in node))
        case List():
            if not node.elements:
                raise CodegenUnsupportedError("Cannot lower an empty list")
            return _lower_application(node, scope)
        case DictionaryLiteral():
            raise CodegenUnsupportedError("Dictionaries have no JavaScript lowering")
    raise CodegenUnsupportedError(f"Cannot lower {to_string(node)}")


def codegen(node: Node) -> JsNode:
    """Lower a parsed Squirrel expression to a JavaScript expression node."""
    try:
        assigned = frozenset(_form_targets(node, "set", True))
        return _lower_scope(node, (), Scope(assigned=assigned), toplevel=True)
    except RecursionError:
        raise CodegenUnsupportedError("Expression is nested too deeply") from None
