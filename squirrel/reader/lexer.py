"""
  Squirrel lexer

- Single pass, maximal munch over the source text.
- Every token records its offset so errors can point at the offending lexeme.
- Words (runs of letters, digits, '.' and '-') are classified after they are
  consumed whole, so `1.` or `foo-` fail as a unit instead of splitting into
  a valid prefix and a stray character.

    - NUMBER  -> -?digits(.digits)?     value: float
    - SYMBOL  -> letter(letters|digits|'-')* not ending in '-'
    - STRING  -> "..." with \\" \\\\ \\n \\t \\r escapes    value: decoded str
"""

from __future__ import annotations

import re
from typing import Any, Iterator, NamedTuple

from squirrel.errors import LexError


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbracket>\[)"
    r"|(?P<rbracket>\])"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<unterminated>")'
    r"|(?P<word>[A-Za-z0-9.\-]+)"
)

NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?\Z")
SYMBOL_RE = re.compile(r"[A-Za-z](?:[A-Za-z0-9\-]*[A-Za-z0-9])?\Z")
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

SKIPPED = ("whitespace", "comment")


class Token(NamedTuple):
    kind: str
    text: str
    position: int
    value: Any = None

    def __str__(self) -> str:
        return self.text if self.kind != "eof" else "end of input"


def _classify_word(word: str, pos: int) -> Token:
    if NUMBER_RE.match(word):
        return Token("number", word, pos, float(word))
    if SYMBOL_RE.match(word):
        return Token("symbol", word, pos, word)
    if word.startswith("-") and word[1:2].isalpha():
        raise LexError(f"Symbol cannot begin with a hyphen: {word!r}", word, pos)
    if word[0].isalpha() and word.endswith("-"):
        raise LexError(f"Symbol cannot end with a hyphen: {word!r}", word, pos)
    if word.startswith("."):
        raise LexError(f"Number cannot begin with a decimal point: {word!r}", word, pos)
    if word.endswith("."):
        raise LexError(f"Number cannot end with a decimal point: {word!r}", word, pos)
    raise LexError(f"Malformed number or symbol: {word!r}", word, pos)


def _decode_string(literal: str, pos: int) -> str:
    def replace(match: re.Match) -> str:
        ch = match.group(1)
        if ch not in ESCAPES:
            raise LexError(f"Unknown escape sequence \\{ch} in string", literal, pos)
        return ESCAPES[ch]

    return ESCAPE_RE.sub(replace, literal[1:-1])


def tokenize(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens, finishing with a single `eof` token."""
    pos = 0
    n = len(source)
    while pos < n:
        match = TOKEN_RE.match(source, pos)
        if match is None:
            raise LexError(f"Unexpected character at {pos}: {source[pos]!r}", source[pos], pos)
        kind = match.lastgroup
        text = match.group()
        if kind == "unterminated":
            raise LexError(f"Unterminated string starting at {pos}", source[pos:], pos)
        if kind == "word":
            yield _classify_word(text, pos)
        elif kind == "string":
            yield Token("string", text, pos, _decode_string(text, pos))
        elif kind not in SKIPPED:
            yield Token(kind, text, pos)
        pos = match.end()
    yield Token("eof", "", n)


class TokenStream:
    """A fully lexed token sequence with one token of lookahead."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].kind != "eof":
            end = self.tokens[-1].position + len(self.tokens[-1].text) if self.tokens else 0
            self.tokens.append(Token("eof", "", end))
        self.index = 0

    def peek(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        tok = self.tokens[self.index]
        if tok.kind != "eof":
            self.index += 1
        return tok

    def at_end(self) -> bool:
        return self.peek().kind == "eof"

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


def lex(source: str) -> TokenStream:
    """Lex the whole of `source`. Raises LexError on the first bad lexeme."""
    return TokenStream(list(tokenize(source)))
