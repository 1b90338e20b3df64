"""
  klisp Reader, Lexer and Parser

- Streaming, lazy parsing: forms are produced one at a time
- Emits the value model directly:

    - nil -> Nil
    - true / false -> bool
    - numbers -> float
    - lists -> tuple
    - 'x -> (quote x)
    - anything else -> Symbol
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from klisp import SExpression
from klisp.errors import KlispSyntaxError
from klisp.types.nil import Nil
from klisp.types.symbol import Symbol

TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # quote shorthand
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<atom>[^\s()';]+)"  # symbols and numbers
    r")",
)

Token = tuple[str, str, int]

NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

QUOTE = Symbol("quote")

KEYWORD_ATOMS: dict[str, SExpression] = {
    "nil": Nil,
    "true": True,
    "false": False,
}


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None:
            # Only trailing whitespace is left
            if source[pos:].isspace():
                return
            raise KlispSyntaxError(f"Unexpected character {source[pos]!r}", pos)
        pos = m.end()
        kind = m.lastgroup
        if kind is None or kind == "comment":
            continue
        yield kind, m.group(kind), m.start(kind)


def parse_atom(text: str) -> SExpression:
    if text in KEYWORD_ATOMS:
        return KEYWORD_ATOMS[text]
    # Decimal literals only: no inf/nan spellings, no digit separators
    if NUMBER_RE.fullmatch(text):
        return float(text)
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Optional[SExpression]:
        """Parse the next complete form, or return None at end of input."""
        token = self.advance()
        if token is None:
            return None
        tok_type, tok_val, offset = token

        if tok_type == "atom":
            return parse_atom(tok_val)

        if tok_type == "quote":
            expr = self.parse_expr()
            if expr is None:
                raise KlispSyntaxError("Expected a form after quote", offset)
            return QUOTE, expr

        if tok_type == "lparen":
            items = []
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise KlispSyntaxError("Unmatched '('", offset)
                if nxt[0] == "rparen":
                    self.advance()
                    return tuple(items)
                items.append(self.parse_expr())

        raise KlispSyntaxError(f"Unexpected {tok_val!r}", offset)

    def parse_all(self) -> Iterator[SExpression]:
        while self.peek() is not None:
            yield self.parse_expr()


def read_all(source: str) -> Iterator[SExpression]:
    """Lazily read every top-level form in `source`."""
    return TokenStream(lex(source)).parse_all()


def read(source: str) -> Optional[SExpression]:
    """Read the first form in `source`, or None if it holds none."""
    return TokenStream(lex(source)).parse_expr()
