"""Token and S-expression leaf types shared by the reader and the evaluator.

A list S-expression is a plain Python list, mirroring how the reader emits
lists; only leaves need a dedicated type so the evaluator can tell a string
literal from an identifier.
"""

from __future__ import annotations

from enum import Enum


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    EOF = "eof"


class Token:
    __slots__ = ("lexeme", "kind", "value", "position")

    def __init__(self, lexeme: str, kind: TokenKind, value: float | str | None = None, position: int = 0):
        self.lexeme = lexeme
        self.kind = kind
        # Decoded literal: float for NUMBER, str for STRING
        self.value = value
        self.position = position

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Token)
            and self.lexeme == other.lexeme
            and self.kind == other.kind
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.lexeme, self.kind))

    def __repr__(self):
        return f"Token({self.lexeme!r}, {self.kind.name})"


class Atom:
    __slots__ = ("token",)
    __match_args__ = ("token",)

    def __init__(self, token: Token):
        self.token = token

    @classmethod
    def number(cls, n: float) -> Atom:
        n = float(n)
        lexeme = str(int(n)) if n.is_integer() else repr(n)
        return cls(Token(lexeme, TokenKind.NUMBER, n))

    @classmethod
    def string(cls, s: str) -> Atom:
        return cls(Token(f'"{s}"', TokenKind.STRING, s))

    @classmethod
    def identifier(cls, name: str) -> Atom:
        return cls(Token(name, TokenKind.IDENTIFIER))

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    @property
    def lexeme(self) -> str:
        return self.token.lexeme

    def is_identifier(self) -> bool:
        return self.token.kind is TokenKind.IDENTIFIER

    def __eq__(self, other) -> bool:
        return isinstance(other, Atom) and self.token == other.token

    def __hash__(self) -> int:
        return hash(self.token)

    def __repr__(self):
        return f"Atom({self.token.lexeme!r})"

    def __str__(self):
        return self.token.lexeme


def sexp_to_source(expr) -> str:
    """Render an S-expression back to source text."""
    if isinstance(expr, list):
        return "(" + " ".join(sexp_to_source(e) for e in expr) + ")"
    return str(expr)
