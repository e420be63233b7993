"""Canonical textual rendering of Squirrel values.

Every value has exactly one rendering; tests compare values through it.
Numbers follow the layout of JavaScript's Number.prototype.toString so the
evaluator and the JavaScript backend print identical text.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from io import StringIO

from squirrel import Value
from squirrel.types.lambda_fn import Lambda
from squirrel.types.native_fn import NativeFunction
from squirrel.types.nodes import Dictionary, DictionaryLiteral, List
from squirrel.types.symbol import Symbol


def format_number(value: float) -> str:
    """Shortest round-trip decimal text for `value`, laid out like JavaScript."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"  # including -0

    sign = "-" if value < 0 else ""
    # repr() already yields the shortest digit string that round-trips
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k  # value == 0.digits * 10**n

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def format_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _write(value: Value, buffer: StringIO) -> None:
    # bool before float: the kinds never mix
    if isinstance(value, bool):
        buffer.write("true" if value else "false")
    elif isinstance(value, (int, float)):
        buffer.write(format_number(float(value)))
    elif isinstance(value, str):
        buffer.write(format_string(value))
    elif isinstance(value, Symbol):
        buffer.write(value.id)
    elif isinstance(value, List):
        buffer.write("[" if value.vector else "(")
        for i, element in enumerate(value):
            if i:
                buffer.write(" ")
            _write(element, buffer)
        buffer.write("]" if value.vector else ")")
    elif isinstance(value, Dictionary):
        buffer.write("{")
        for i, (key, item) in enumerate(value.pairs):
            if i:
                buffer.write(" ")
            buffer.write(format_string(key))
            buffer.write(" ")
            _write(item, buffer)
        buffer.write("}")
    elif isinstance(value, DictionaryLiteral):
        buffer.write("{")
        for i, entry in enumerate(value.entries):
            if i:
                buffer.write(" ")
            _write(entry, buffer)
        buffer.write("}")
    elif isinstance(value, NativeFunction):
        buffer.write(f"<native {value.name}>")
    elif isinstance(value, Lambda):
        buffer.write("(lambda (")
        buffer.write(" ".join(p.id for p in value.params))
        buffer.write(") ")
        _write(value.body, buffer)
        buffer.write(")")
    else:
        buffer.write(str(value))


def to_string(value: Value) -> str:
    """Return the canonical rendering of `value`."""
    with StringIO() as buffer:
        _write(value, buffer)
        return buffer.getvalue()
