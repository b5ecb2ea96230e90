"""Hand-written lexer for the routegen DSL.

Tokenizes route-table source into a stream of Token objects. Opaque code
(nested endpoints and the base expression) is tokenized too, loosely, so the
parser can find its boundaries; unknown characters become PUNCT tokens.
"""

from __future__ import annotations

from routegen.dsl.errors import RouteSyntaxError
from routegen.dsl.tokens import KEYWORDS, Token, TokenKind

_PUNCT_MAP: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "*": TokenKind.STAR,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
}

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}


class LexerError(RouteSyntaxError):
    """Raised when the lexer encounters an invalid character sequence."""

    label = "Lexer error"


class Lexer:
    """Tokenize routegen DSL source text.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str, line: int = 1, column: int = 1) -> None:
        self._source = source
        self._pos = 0
        self._line = line
        self._col = column
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return all tokens including EOF."""
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            self._scan_token()

        self._tokens.append(
            Token(TokenKind.EOF, "", self._line, self._col, self._pos, self._pos)
        )
        return self._tokens

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._peek()

        if ch == "#":
            self._skip_comment()
            return

        if ch == "\n":
            self._emit_single(TokenKind.NEWLINE)
            return

        if ch in ('"', "'"):
            self._scan_string(ch)
            return

        if ch.isdigit():
            self._scan_number()
            return

        if ch.isalpha() or ch == "_":
            self._scan_identifier()
            return

        if ch == ":":
            if self._peek_next() == ":":
                start, line, col = self._pos, self._line, self._col
                self._advance()
                self._advance()
                self._tokens.append(Token(TokenKind.PATH_SEP, "::", line, col, start, self._pos))
            else:
                self._emit_single(TokenKind.COLON)
            return

        if ch in _PUNCT_MAP:
            self._emit_single(_PUNCT_MAP[ch])
            return

        if ch.isprintable():
            self._emit_single(TokenKind.PUNCT)
            return

        raise LexerError(f"Unexpected character: {ch!r}", self._line, self._col)

    def _emit_single(self, kind: TokenKind) -> None:
        start, line, col = self._pos, self._line, self._col
        ch = self._advance()
        value = "\\n" if ch == "\n" else ch
        self._tokens.append(Token(kind, value, line, col, start, self._pos))

    def _skip_comment(self) -> None:
        """Consume a # comment until end of line."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _scan_string(self, quote: str) -> None:
        """Scan a single- or double-quoted string literal."""
        start = self._pos
        start_line = self._line
        start_col = self._col
        self._advance()  # skip opening quote

        text = ""
        while not self._at_end():
            ch = self._peek()
            if ch == quote:
                self._advance()  # skip closing quote
                self._tokens.append(
                    Token(TokenKind.STRING, text, start_line, start_col, start, self._pos)
                )
                return
            if ch == "\\":
                self._advance()
                if self._at_end():
                    break
                escaped = self._advance()
                text += _ESCAPES.get(escaped, "\\" + escaped)
            else:
                if ch == "\n":
                    raise LexerError(
                        "Unterminated string (newline before closing quote)", start_line, start_col
                    )
                text += ch
                self._advance()

        raise LexerError("Unterminated string (hit EOF)", start_line, start_col)

    def _scan_number(self) -> None:
        """Scan a numeric literal (int or float, with optional exponent)."""
        start = self._pos
        start_col = self._col

        while not self._at_end() and self._peek().isdigit():
            self._advance()

        if self._peek() == "." and self._peek_next().isdigit():
            self._advance()
            while not self._at_end() and self._peek().isdigit():
                self._advance()

        # Scientific notation
        if self._peek() in ("e", "E"):
            self._advance()
            if self._peek() in ("+", "-"):
                self._advance()
            while not self._at_end() and self._peek().isdigit():
                self._advance()

        text = self._source[start : self._pos]
        self._tokens.append(Token(TokenKind.NUMBER, text, self._line, start_col, start, self._pos))

    def _scan_identifier(self) -> None:
        """Scan an identifier or method keyword."""
        start = self._pos
        start_col = self._col

        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            self._advance()

        text = self._source[start : self._pos]
        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        self._tokens.append(Token(kind, text, self._line, start_col, start, self._pos))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self._source[self._pos]

    def _peek_next(self) -> str:
        if self._pos + 1 >= len(self._source):
            return "\0"
        return self._source[self._pos + 1]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip whitespace, including non-ASCII spaces such as NBSP (but not newlines)."""
        while not self._at_end() and self._peek() != "\n" and self._peek().isspace():
            self._advance()
