"""Error types for routegen DSL lexing and parsing."""

from __future__ import annotations


class RouteSyntaxError(Exception):
    """Base exception for input that does not match the route grammar.

    Subclasses set ``label`` to name the stage that failed.
    """

    label = "Syntax error"

    def __init__(self, message: str, line: int, column: int) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{self.label} at L{line}:{column}: {message}")
