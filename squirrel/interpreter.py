from __future__ import annotations

import logging
from typing import Optional, TextIO

from squirrel import Value
from squirrel.builtins import Namespace, build_namespace, global_environment
from squirrel.codegen import codegen, serialize
from squirrel.config import trace_codegen
from squirrel.evaluation.evaluator import evaluate
from squirrel.reader.lexer import lex
from squirrel.reader.parser import parse
from squirrel.types.environment import Environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates Squirrel source against a persistent global
    environment. The builtin namespace is injected, so two interpreters
    never share bindings or output.
    """

    def __init__(self, namespace: Optional[Namespace] = None, out: Optional[TextIO] = None):
        self.namespace: Namespace = namespace if namespace is not None else build_namespace(out)
        self.env: Environment = global_environment(self.namespace)

    def eval(self, code: str) -> Value:
        """Evaluate one expression; bindings made by `def` persist across calls."""
        logger.debug("eval: %s", code)
        return evaluate(parse(lex(code)), self.env)

    def compile(self, code: str) -> str:
        """Return the JavaScript source for one expression."""
        js = serialize(codegen(parse(lex(code))))
        if trace_codegen():
            logger.info("compiled %s -> %s", code, js)
        else:
            logger.debug("compiled %s -> %s", code, js)
        return js
