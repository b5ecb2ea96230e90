"""routegen code generator — translates a parsed RouteTable into a builder chain.

Takes a RouteTable (from the parser) and produces a single Python expression
that starts from the base router and applies one `.at(...)` or `.nest(...)`
call per entry, in source order.
"""

from __future__ import annotations

import json
import logging

from routegen.compiler.naming import derive_handlers
from routegen.core.config import RouteGenConfig, get_config
from routegen.core.types import Severity, ValidationError
from routegen.dsl.ast_nodes import NestedRoute, NormalRoute, RouteTable
from routegen.dsl.parser import parse_routes
from routegen.dsl.validator import has_errors, validate_routes

logger = logging.getLogger(__name__)


class CompilationError(Exception):
    """Raised when a route table fails validation and cannot be generated."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = errors
        details = "; ".join(f"line {e.line}: {e.message}" for e in errors)
        super().__init__(f"Route table has {len(errors)} error(s): {details}")


class RouteCodeGenerator:
    """Generate builder-chain expressions from RouteTable nodes.

    Usage:
        generator = RouteCodeGenerator(config=my_config)
        code = generator.generate(table)
    """

    def __init__(self, config: RouteGenConfig | None = None) -> None:
        self._config = config or get_config()

    def generate(self, table: RouteTable) -> str:
        """Render the whole table as one chained expression."""
        base = table.base if table.base is not None else self._config.router_factory
        base = _parenthesize(base)

        operations: list[str] = []
        for entry in table.entries:
            if isinstance(entry, NestedRoute):
                operations.append(self._render_nested(entry))
            elif isinstance(entry, NormalRoute):
                operations.append(self._render_normal(entry))

        logger.debug("Generated %d builder operations", len(operations))
        return self._layout(base, operations)

    # ------------------------------------------------------------------
    # Entry renderers
    # ------------------------------------------------------------------

    def _render_nested(self, route: NestedRoute) -> str:
        return f".nest({_quote(route.mount_path)}, {_parenthesize(route.endpoint)})"

    def _render_normal(self, route: NormalRoute) -> str:
        """Fold the methods into `get(h1).post(h2)...` for one path."""
        separator = self._config.path_separator
        chain = ""
        for method, handler in zip(route.methods, derive_handlers(route.handler, route.methods)):
            name = handler.render(separator)
            if not chain:
                chain = f"{self._config.method_prefix}{method.binding}({name})"
            else:
                chain += f".{method.binding}({name})"

        return f".at({_quote(route.path)}, {chain})"

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _layout(self, base: str, operations: list[str]) -> str:
        if not operations:
            return base
        if self._config.layout == "inline":
            return base + "".join(operations)

        pad = " " * self._config.indent
        lines = [base, *operations]
        return "(\n" + "\n".join(pad + line for line in lines) + "\n)"


def compile_routes(
    source: str,
    config: RouteGenConfig | None = None,
    line: int = 1,
    column: int = 1,
) -> str:
    """Parse, validate, and generate code for route-table source text.

    Warnings are logged; errors raise CompilationError.
    """
    table = parse_routes(source, line=line, column=column)

    errors = validate_routes(table)
    for e in errors:
        if e.severity != Severity.ERROR:
            logger.warning("line %d: %s", e.line, e.message)
    if has_errors(errors):
        raise CompilationError([e for e in errors if e.severity == Severity.ERROR])

    return RouteCodeGenerator(config).generate(table)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _quote(text: str) -> str:
    """Render text as a double-quoted Python string literal."""
    return json.dumps(text, ensure_ascii=False)


def _parenthesize(code: str) -> str:
    # A bare multi-line expression is not valid Python outside brackets
    if "\n" in code:
        return f"({code})"
    return code
