"""
  Mankai Lexer and Parser

- Lexer: regex driven, yields Token objects and always ends with an EOF token.
- Parser: streaming, one top-level S-expression at a time.
- Emits Atom leaves and plain Python lists:

    - numbers     -> Atom(NUMBER), value is a float
    - strings     -> Atom(STRING), value is the raw text between the quotes
    - identifiers -> Atom(IDENTIFIER)
    - lists       -> Python list of S-expressions (never empty)
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from mankai import Sexp
from mankai.errors import ScanError, ParseError
from mankai.types.sexp import Atom, Token, TokenKind


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # a backslash skips the next character
    r"|(?P<number>[0-9]+(?:\.[0-9]+)?)"  # digits, optional fractional part
    r"|(?P<identifier>[^\s();]+)",  # fallback: anything up to a separator
    re.DOTALL,
)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens, then a final EOF token."""
    pos = 0
    n = len(source)

    while pos < n:
        if source[pos] == '"':
            m = TOKEN_RE.match(source, pos)
            if m is None or m.lastgroup != "string":
                raise ScanError("unfinished string", pos)
        else:
            m = TOKEN_RE.match(source, pos)
            if m is None:
                raise ScanError(f"unexpected character {source[pos]!r}", pos)

        kind = m.lastgroup
        lexeme = m.group(kind)
        if kind == "lparen":
            yield Token(lexeme, TokenKind.LEFT_PAREN, position=pos)
        elif kind == "rparen":
            yield Token(lexeme, TokenKind.RIGHT_PAREN, position=pos)
        elif kind == "string":
            yield Token(lexeme, TokenKind.STRING, lexeme[1:-1], position=pos)
        elif kind == "number":
            yield Token(lexeme, TokenKind.NUMBER, float(lexeme), position=pos)
        elif kind == "identifier":
            yield Token(lexeme, TokenKind.IDENTIFIER, position=pos)
        pos = m.end()

    yield Token("", TokenKind.EOF, position=n)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.eof = Token("", TokenKind.EOF)

    def peek(self) -> Token:
        if not self.buffer:
            token = next(self.tokens, None)
            if token is None:
                return self.eof
            self.buffer.append(token)
        return self.buffer[0]

    def advance(self) -> Token:
        token = self.peek()
        if self.buffer:
            self.buffer.pop(0)
        return token

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def parse_expr(self) -> Optional[Sexp]:
        """Parse the next top-level expression, or return None at end of input."""
        if self.is_at_end():
            return None
        return self._parse_sexp()

    def _parse_sexp(self) -> Sexp:
        token = self.advance()

        if token.kind is TokenKind.LEFT_PAREN:
            return self._finish_list()
        if token.kind is TokenKind.RIGHT_PAREN:
            raise ParseError("expected atom or list", token)
        if token.kind is TokenKind.EOF:
            raise ParseError("expected ')'", token)
        return Atom(token)

    def _finish_list(self) -> list:
        # A list holds at least one element: `()` is rejected by _parse_sexp
        items = [self._parse_sexp()]
        while self.peek().kind not in (TokenKind.RIGHT_PAREN, TokenKind.EOF):
            items.append(self._parse_sexp())

        if self.peek().kind is not TokenKind.RIGHT_PAREN:
            raise ParseError("expected ')'", self.peek())
        self.advance()
        return items

    def parse_all(self) -> Iterator[Sexp]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def parse(source: str) -> Sexp:
    """Parse exactly the first expression of `source`."""
    expr = TokenStream(lex(source)).parse_expr()
    if expr is None:
        raise ParseError("no tokens!")
    return expr
