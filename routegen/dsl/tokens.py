"""Token types for the routegen DSL lexer.

Defines all token kinds and the Token dataclass used by the lexer and parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """All token types recognized by the routegen lexer."""

    # Literals
    STRING = auto()  # "/path" or '/path'
    NUMBER = auto()  # 42, 0.5
    IDENTIFIER = auto()  # unquoted name

    # Method keywords
    GET = auto()
    POST = auto()
    PUT = auto()
    DELETE = auto()

    # Punctuation
    PATH_SEP = auto()  # ::
    STAR = auto()  # *
    COMMA = auto()  # ,
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COLON = auto()  # :
    DOT = auto()  # .
    LT = auto()  # <
    GT = auto()  # >
    PUNCT = auto()  # anything else, only meaningful inside opaque code

    # Special
    NEWLINE = auto()
    EOF = auto()


# Map keyword strings to token kinds (case-sensitive)
KEYWORDS: dict[str, TokenKind] = {
    "GET": TokenKind.GET,
    "POST": TokenKind.POST,
    "PUT": TokenKind.PUT,
    "DELETE": TokenKind.DELETE,
}

METHOD_KINDS = frozenset(KEYWORDS.values())

OPENERS: dict[TokenKind, TokenKind] = {
    TokenKind.LBRACE: TokenKind.RBRACE,
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
}


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer.

    ``offset`` and ``end`` are character offsets into the source, so the
    parser can recover opaque code exactly as written.
    """

    kind: TokenKind
    value: str
    line: int
    column: int
    offset: int = 0
    end: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, L{self.line}:{self.column})"
