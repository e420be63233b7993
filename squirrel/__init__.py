# Core type aliases for Squirrel's data model.
# Atoms are plain Python values (float for Number, bool for Boolean, str for
# String); Symbol, List, DictionaryLiteral and Dictionary live in squirrel.types.
#
# Naming guidance:
# - Node:  use in reader/codegen code to denote syntax as read.
# - Value: use in evaluator/runtime code to denote evaluated values.
# Both resolve to `Any`: code is data, and a quoted Node is a Value.

from typing import Any, Callable

Value = Any
Node = Value

# Evaluator function type handed to special forms: (node, env, budget) -> value
EvaluatorFn = Callable[..., Value]

from squirrel.errors import (  # noqa: E402
    ArgumentError,
    CodegenUnsupportedError,
    DictionaryArityError,
    DictionaryKeyError,
    FormatError,
    LexError,
    ParseError,
    SquirrelError,
    SquirrelTypeError,
    StackExhausted,
    UnboundSymbolError,
)
from squirrel.reader.lexer import lex  # noqa: E402
from squirrel.reader.parser import parse  # noqa: E402
from squirrel.printer import to_string  # noqa: E402
from squirrel.evaluation.evaluator import evaluate  # noqa: E402
from squirrel.builtins import build_namespace, global_environment  # noqa: E402
from squirrel.codegen import codegen, serialize  # noqa: E402
from squirrel.interpreter import Interpreter  # noqa: E402

__all__ = [
    "Value",
    "Node",
    "EvaluatorFn",
    "lex",
    "parse",
    "evaluate",
    "to_string",
    "codegen",
    "serialize",
    "build_namespace",
    "global_environment",
    "Interpreter",
    "SquirrelError",
    "LexError",
    "ParseError",
    "UnboundSymbolError",
    "SquirrelTypeError",
    "ArgumentError",
    "FormatError",
    "DictionaryKeyError",
    "DictionaryArityError",
    "StackExhausted",
    "CodegenUnsupportedError",
]
