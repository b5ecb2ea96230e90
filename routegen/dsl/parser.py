"""Hand-written recursive descent parser for the routegen DSL.

Consumes a list of Token objects from the lexer and produces a RouteTable.
One token of lookahead decides every production; there is no backtracking.

Grammar:

    body    = [ EXPR "," ] "{" { route } "}" ;
    route   = "*" STRING BLOCK
            |     STRING path methods ;
    path    = IDENT { "::" IDENT } ;
    methods = method { method } ;
    method  = "GET" | "POST" | "PUT" | "DELETE" ;
"""

from __future__ import annotations

import logging

from routegen.core.types import Method
from routegen.dsl.ast_nodes import (
    NestedRoute,
    NormalRoute,
    PathTemplate,
    RouteEntry,
    RouteTable,
)
from routegen.dsl.errors import RouteSyntaxError
from routegen.dsl.lexer import Lexer
from routegen.dsl.tokens import METHOD_KINDS, OPENERS, Token, TokenKind

logger = logging.getLogger(__name__)

_CLOSERS = frozenset(OPENERS.values())


class ParseError(RouteSyntaxError):
    """Raised when the parser encounters an unexpected token."""

    label = "Parse error"

    def __init__(self, message: str, token: Token) -> None:
        self.token = token
        super().__init__(message, token.line, token.column)


class Parser:
    """Parse a routegen token stream into a RouteTable.

    ``source`` must be the text the tokens were produced from; opaque code
    is sliced out of it verbatim.

    Usage:
        parser = Parser(tokens, source)
        table = parser.parse()
    """

    def __init__(self, tokens: list[Token], source: str) -> None:
        # Newlines are insignificant; opaque code is recovered from offsets
        self._tokens = [t for t in tokens if t.kind != TokenKind.NEWLINE]
        self._source = source
        self._pos = 0

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def parse(self) -> RouteTable:
        """Parse the full token stream into a RouteTable."""
        base = None
        if not self._check(TokenKind.LBRACE):
            base = self._parse_base()

        self._consume(TokenKind.LBRACE, "Expected '{' to open route table")
        entries: list[RouteEntry] = []
        while not self._check(TokenKind.RBRACE):
            if self._at_end():
                raise ParseError("Expected '}' to close route table", self._current())
            entries.append(self._parse_route())
        self._advance()

        if not self._at_end():
            raise ParseError(
                f"Unexpected token after route table: {self._current().kind.name}",
                self._current(),
            )

        logger.debug("Parsed %d route entries (base=%r)", len(entries), base)
        return RouteTable(entries=tuple(entries), base=base)

    # ------------------------------------------------------------------
    # Base expression
    # ------------------------------------------------------------------

    def _parse_base(self) -> str:
        """Capture everything up to the first top-level ',' as opaque code."""
        start = self._current()
        depth = 0
        while True:
            token = self._current()
            if token.kind == TokenKind.EOF:
                raise ParseError("Expected ',' after base expression", token)
            if token.kind in OPENERS:
                depth += 1
            elif token.kind in _CLOSERS:
                depth -= 1
                if depth < 0:
                    raise ParseError(f"Unbalanced {token.value!r} in base expression", token)
            elif token.kind == TokenKind.COMMA and depth == 0:
                break
            self._advance()

        comma = self._advance()
        text = self._source[start.offset : comma.offset].strip()
        if not text:
            raise ParseError("Expected base expression before ','", comma)
        return text

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def _parse_route(self) -> RouteEntry:
        if self._check(TokenKind.STAR):
            return self._parse_nested()
        if self._check(TokenKind.STRING):
            return self._parse_normal()
        raise ParseError(
            f"Expected '*' or a path string to start a route, got {self._current().kind.name}",
            self._current(),
        )

    def _parse_nested(self) -> NestedRoute:
        star = self._consume(TokenKind.STAR, "Expected '*'")
        mount_path = self._consume(TokenKind.STRING, "Expected mount path string after '*'").value
        endpoint = self._parse_block()
        return NestedRoute(mount_path=mount_path, endpoint=endpoint, line=star.line)

    def _parse_block(self) -> str:
        """Capture a `{ ... }` block verbatim, without re-parsing its content."""
        opening = self._consume(TokenKind.LBRACE, "Expected '{' to open nested endpoint")
        depth = 1
        while True:
            token = self._current()
            if token.kind == TokenKind.EOF:
                raise ParseError("Expected '}' to close nested endpoint", token)
            if token.kind == TokenKind.LBRACE:
                depth += 1
            elif token.kind == TokenKind.RBRACE:
                depth -= 1
                if depth == 0:
                    break
            self._advance()

        closing = self._advance()
        text = self._source[opening.end : closing.offset].strip()
        if not text:
            raise ParseError("Nested endpoint block is empty", opening)
        return text

    def _parse_normal(self) -> NormalRoute:
        path = self._consume(TokenKind.STRING, "Expected route path string")
        handler = self._parse_path_template()
        methods = self._parse_methods(path.value)
        return NormalRoute(path=path.value, handler=handler, methods=methods, line=path.line)

    def _parse_path_template(self) -> PathTemplate:
        """Parse `ident { '::' ident }`, rejecting generic segments."""
        segments = [self._consume(TokenKind.IDENTIFIER, "Expected handler identifier").value]
        while self._check(TokenKind.PATH_SEP):
            self._advance()
            segments.append(
                self._consume(TokenKind.IDENTIFIER, "Expected identifier after '::'").value
            )

        if self._check(TokenKind.LT):
            raise ParseError(
                f"Generic arguments are not allowed on handler '{'::'.join(segments)}'",
                self._current(),
            )
        return PathTemplate(tuple(segments))

    def _parse_methods(self, path: str) -> tuple[Method, ...]:
        methods: list[Method] = []
        while self._current().kind in METHOD_KINDS:
            token = self._advance()
            method = Method(token.value)
            if method in methods:
                raise ParseError(f"Duplicate method {method.value} for route '{path}'", token)
            methods.append(method)

        if not methods:
            raise ParseError(
                f"Expected at least one method (GET, POST, PUT, DELETE) for route '{path}', "
                f"got {self._current().kind.name}",
                self._current(),
            )
        return tuple(methods)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self._pos >= len(self._tokens):
            end = len(self._source)
            return Token(TokenKind.EOF, "", 0, 0, end, end)
        return self._tokens[self._pos]

    def _at_end(self) -> bool:
        return self._current().kind == TokenKind.EOF

    def _check(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        token = self._current()
        if not self._at_end():
            self._pos += 1
        return token

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        raise ParseError(
            f"{message} (got {self._current().kind.name}: {self._current().value!r})",
            self._current(),
        )


def parse_routes(source: str, line: int = 1, column: int = 1) -> RouteTable:
    """Tokenize and parse route-table source in one step.

    ``line`` and ``column`` locate the first character, for sources that are
    cut out of a larger file.
    """
    tokens = Lexer(source, line=line, column=column).tokenize()
    return Parser(tokens, source).parse()
