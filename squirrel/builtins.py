"""Built-in functions for the Squirrel runtime environment.

Arithmetic, comparison, collection and conversion natives, plus `print`.
Natives never coerce across kinds: every mismatch is an ArgumentError.
The namespace is built as an immutable mapping and injected into a global
environment, so separate interpreters never share state.
"""

from __future__ import annotations

import math
import re
import sys
from types import MappingProxyType
from typing import Callable, Mapping, Optional, TextIO

from squirrel import Value
from squirrel.errors import ArgumentError, FormatError
from squirrel.printer import to_string
from squirrel.types.environment import Environment
from squirrel.types.native_fn import NativeFunction
from squirrel.types.nodes import List
from squirrel.types.symbol import Symbol

Namespace = Mapping[Symbol, NativeFunction]

INTEGER_RE = re.compile(r"[+-]?[0-9]+\Z")
FLOAT_RE = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?\Z")


def is_number(value: Value) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def _numbers(name: str, args: list[Value]) -> tuple[float, float]:
    x, y = args
    if not (is_number(x) and is_number(y)):
        raise ArgumentError(
            f"{name} requires two numbers, got {to_string(x)} and {to_string(y)}"
        )
    return x, y


def _index(name: str, value: Value) -> int:
    if not is_number(value) or not float(value).is_integer():
        raise ArgumentError(f"{name} index must be an integral number, got {to_string(value)}")
    return int(value)


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Value]) -> float:
    x, y = _numbers("add", args)
    return x + y


def sub(args: list[Value]) -> float:
    x, y = _numbers("sub", args)
    return x - y


def mul(args: list[Value]) -> float:
    x, y = _numbers("mul", args)
    return x * y


def div(args: list[Value]) -> float:
    """IEEE division: a zero divisor gives a signed infinity or NaN."""
    x, y = _numbers("div", args)
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def mod(args: list[Value]) -> float:
    """Truncated remainder: the result takes the sign of the dividend."""
    x, y = _numbers("mod", args)
    if y == 0 or math.isinf(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


def power(args: list[Value]) -> float:
    """IEEE power, as in JavaScript: a NaN exponent always gives NaN."""
    x, y = _numbers("pow", args)
    odd = float(y).is_integer() and y % 2 == 1
    if math.isnan(y) or (abs(x) == 1 and math.isinf(y)):
        return math.nan
    if x == 0 and y < 0:
        # sign survives only for -0 raised to an odd integer
        return math.copysign(math.inf, x) if odd else math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and odd else math.inf
    except ValueError:
        return math.nan


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, op: Callable[[float, float], bool]) -> NativeFunction:
    def compare(args: list[Value]) -> bool:
        x, y = _numbers(name, args)
        return op(x, y)

    return NativeFunction(name, compare, arity=2)


# -------------------------------
# Collections
# -------------------------------
def list_builtin(args: list[Value]) -> List:
    return List(args)


def vector_builtin(args: list[Value]) -> List:
    return List(args, vector=True)


def length(args: list[Value]) -> float:
    (seq,) = args
    if isinstance(seq, List):
        return float(len(seq))
    if isinstance(seq, str):
        return float(len(seq))
    raise ArgumentError(f"length requires a list or a string, got {to_string(seq)}")


def nth(args: list[Value]) -> Value:
    """(nth seq i): 0-based element of a list, or 1-character string."""
    seq, index = args
    if not isinstance(seq, (List, str)):
        raise ArgumentError(f"nth requires a list or a string, got {to_string(seq)}")
    i = _index("nth", index)
    if not 0 <= i < len(seq):
        raise ArgumentError(f"nth index {i} out of range for length {len(seq)}")
    return seq[i]


def slice_builtin(args: list[Value]) -> Value:
    """(slice seq start end): elements [start, end) of a list or string."""
    seq, start, end = args
    lo = _index("slice", start)
    hi = _index("slice", end)
    if isinstance(seq, List):
        return List(seq.elements[lo:hi], vector=seq.vector)
    if isinstance(seq, str):
        return seq[lo:hi]
    raise ArgumentError(f"slice requires a list or a string, got {to_string(seq)}")


def concat(args: list[Value]) -> Value:
    """Join lists with lists or strings with strings; the first argument sets the kind."""
    first = args[0]
    if isinstance(first, List):
        elements: list[Value] = []
        for arg in args:
            if not isinstance(arg, List):
                raise ArgumentError(f"Cannot join a list with {to_string(arg)}")
            elements.extend(arg.elements)
        return List(elements, vector=first.vector)
    if isinstance(first, str):
        for arg in args:
            if not isinstance(arg, str):
                raise ArgumentError(f"Cannot join a string with {to_string(arg)}")
        return "".join(args)
    raise ArgumentError(f"concat requires lists or strings, got {to_string(first)}")


# -------------------------------
# Conversion
# -------------------------------
def _text(name: str, value: Value) -> str:
    if not isinstance(value, str):
        raise ArgumentError(f"{name} requires a string, got {to_string(value)}")
    return value.strip()


def parse_integer(args: list[Value]) -> float:
    text = _text("parse-integer", args[0])
    if not INTEGER_RE.match(text):
        raise FormatError(f"Cannot parse {args[0]!r} as an integer")
    return float(int(text))


def parse_float(args: list[Value]) -> float:
    text = _text("parse-float", args[0])
    if not FLOAT_RE.match(text):
        raise FormatError(f"Cannot parse {args[0]!r} as a number")
    return float(text)


# -------------------------------
# Output
# -------------------------------
def make_print(out: Optional[TextIO]) -> NativeFunction:
    def print_builtin(args: list[Value]) -> Value:
        sink = out if out is not None else sys.stdout
        sink.write(to_string(args[0]) + "\n")
        return args[0]

    return NativeFunction("print", print_builtin, arity=1)


# -------------------------------
# Registration
# -------------------------------
def build_namespace(out: Optional[TextIO] = None) -> Namespace:
    """Build the builtin namespace; `print` writes to `out` (stdout when None)."""
    natives = [
        NativeFunction("add", add, arity=2),
        NativeFunction("sub", sub, arity=2),
        NativeFunction("mul", mul, arity=2),
        NativeFunction("div", div, arity=2),
        NativeFunction("mod", mod, arity=2),
        NativeFunction("pow", power, arity=2),
        _comparison("eq", lambda x, y: x == y),
        _comparison("neq", lambda x, y: x != y),
        _comparison("lt", lambda x, y: x < y),
        _comparison("gt", lambda x, y: x > y),
        _comparison("lte", lambda x, y: x <= y),
        _comparison("gte", lambda x, y: x >= y),
        NativeFunction("list", list_builtin),
        NativeFunction("vector", vector_builtin),
        NativeFunction("length", length, arity=1),
        NativeFunction("nth", nth, arity=2),
        NativeFunction("slice", slice_builtin, arity=3),
        NativeFunction("concat", concat, min_args=1),
        NativeFunction("join", concat, min_args=1),
        NativeFunction("parse-integer", parse_integer, arity=1),
        NativeFunction("parse-float", parse_float, arity=1),
        make_print(out),
    ]
    return MappingProxyType({Symbol(fn.name): fn for fn in natives})


def global_environment(namespace: Optional[Namespace] = None) -> Environment:
    """A fresh root environment pre-populated with `namespace`."""
    env = Environment()
    env.update(namespace if namespace is not None else build_namespace())
    return env
