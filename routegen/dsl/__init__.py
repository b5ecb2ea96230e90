"""routegen DSL — tokenizer, parser, and validator for route tables.

Usage:
    from routegen.dsl import Lexer, Parser, validate_routes

    tokens = Lexer(source).tokenize()
    table = Parser(tokens, source).parse()
    errors = validate_routes(table)
"""

from routegen.dsl.ast_nodes import NestedRoute, NormalRoute, PathTemplate, RouteTable
from routegen.dsl.errors import RouteSyntaxError
from routegen.dsl.lexer import Lexer, LexerError
from routegen.dsl.parser import ParseError, Parser, parse_routes
from routegen.dsl.validator import has_errors, validate_routes

__all__ = [
    "Lexer",
    "LexerError",
    "NestedRoute",
    "NormalRoute",
    "ParseError",
    "Parser",
    "PathTemplate",
    "RouteSyntaxError",
    "RouteTable",
    "has_errors",
    "parse_routes",
    "validate_routes",
]
