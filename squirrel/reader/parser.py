"""Recursive-descent parser for Squirrel.

    expr := NUMBER | SYMBOL | STRING
          | "'" expr                 -> (quote expr)
          | "(" expr+ ")"            -> List
          | "[" expr* "]"            -> List(vector=True)
          | "{" expr* "}"            -> DictionaryLiteral

One token of lookahead. The input must hold exactly one expression.
"""

from __future__ import annotations

from typing import Union

from squirrel import Node
from squirrel.errors import ParseError
from squirrel.reader.lexer import Token, TokenStream, lex
from squirrel.types.nodes import DictionaryLiteral, List
from squirrel.types.symbol import Symbol

QUOTE = Symbol("quote")

BOOLEANS = {"true": True, "false": False}

CLOSERS = {"lparen": "rparen", "lbracket": "rbracket", "lbrace": "rbrace"}
DELIMITERS = {"rparen": ")", "rbracket": "]", "rbrace": "}"}


def _parse_sequence(stream: TokenStream, opener: Token) -> list[Node]:
    closer = CLOSERS[opener.kind]
    items: list[Node] = []
    while True:
        tok = stream.peek()
        if tok.kind == closer:
            stream.advance()
            return items
        if tok.kind == "eof":
            raise ParseError(f"Unmatched {opener.text!r} at {opener.position}")
        if tok.kind in DELIMITERS:
            raise ParseError(
                f"Mismatched {tok.text!r} at {tok.position}: expected {DELIMITERS[closer]!r}"
            )
        items.append(parse_expr(stream))


def parse_expr(stream: TokenStream) -> Node:
    tok = stream.advance()

    if tok.kind == "number":
        return tok.value

    if tok.kind == "string":
        return tok.value

    if tok.kind == "symbol":
        if tok.text in BOOLEANS:
            return BOOLEANS[tok.text]
        return Symbol(tok.text)

    if tok.kind == "quote":
        if stream.at_end():
            raise ParseError(f"Quote at {tok.position} has nothing to quote")
        return List([QUOTE, parse_expr(stream)])

    if tok.kind == "lparen":
        items = _parse_sequence(stream, tok)
        if not items:
            raise ParseError(f"Empty symbolic expression at {tok.position}")
        return List(items)

    if tok.kind == "lbracket":
        return List(_parse_sequence(stream, tok), vector=True)

    if tok.kind == "lbrace":
        return DictionaryLiteral(_parse_sequence(stream, tok))

    if tok.kind in DELIMITERS:
        raise ParseError(f"Unmatched {tok.text!r} at {tok.position}")

    raise ParseError("Unexpected end of input")


def parse(tokens: Union[TokenStream, str]) -> Node:
    """Parse exactly one expression from `tokens` (or from source text)."""
    stream = lex(tokens) if isinstance(tokens, str) else tokens
    if stream.at_end():
        raise ParseError("Empty input: expected an expression")
    try:
        expr = parse_expr(stream)
    except RecursionError:
        raise ParseError("Expression is nested too deeply") from None
    if not stream.at_end():
        extra = stream.peek()
        raise ParseError(
            f"Input must be a single expression: unexpected {extra.text!r} at {extra.position}"
        )
    return expr
