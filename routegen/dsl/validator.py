"""Semantic validator for the routegen route table.

Checks the parsed table for issues the grammar cannot express:
- Normal routes registered twice on the same path
- Nested routes mounted twice on the same prefix
- Paths that do not start with '/'
- Handler module segments that are Python keywords

Handler existence and signatures are not checked here; the generated code
is compiled downstream.
"""

from __future__ import annotations

import keyword

from routegen.core.types import Severity, ValidationError
from routegen.dsl.ast_nodes import NormalRoute, RouteTable


def validate_routes(table: RouteTable) -> list[ValidationError]:
    """Run all validation passes on a parsed RouteTable.

    Returns a list of ValidationError objects (may be empty if valid).
    """
    errors: list[ValidationError] = []

    _validate_normal_routes(table, errors)
    _validate_nested_routes(table, errors)

    return errors


def _validate_normal_routes(table: RouteTable, errors: list[ValidationError]) -> None:
    seen_paths: dict[str, int] = {}

    for route in table.normal_routes:
        if route.path in seen_paths:
            errors.append(
                ValidationError(
                    message=(
                        f"Path '{route.path}' is already registered on line "
                        f"{seen_paths[route.path]}; the later registration may shadow it"
                    ),
                    line=route.line,
                    severity=Severity.WARNING,
                )
            )
        else:
            seen_paths[route.path] = route.line

        _check_leading_slash(route.path, "route", route.line, errors)
        _check_handler(route, errors)


def _validate_nested_routes(table: RouteTable, errors: list[ValidationError]) -> None:
    seen_mounts: set[str] = set()

    for route in table.nested_routes:
        if route.mount_path in seen_mounts:
            errors.append(
                ValidationError(
                    message=(
                        f"Mount path '{route.mount_path}' is already nested; "
                        f"both endpoints are mounted in order"
                    ),
                    line=route.line,
                    severity=Severity.WARNING,
                )
            )
        seen_mounts.add(route.mount_path)

        _check_leading_slash(route.mount_path, "nested route", route.line, errors)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_leading_slash(
    path: str,
    kind: str,
    line: int,
    errors: list[ValidationError],
) -> None:
    if not path.startswith("/"):
        errors.append(
            ValidationError(
                message=f"{kind} path '{path}' does not start with '/'",
                line=line,
                severity=Severity.WARNING,
            )
        )


def _check_handler(route: NormalRoute, errors: list[ValidationError]) -> None:
    # The last segment always gets a method prefix, so only the module path matters
    for segment in route.handler.head:
        if keyword.iskeyword(segment):
            errors.append(
                ValidationError(
                    message=(
                        f"Handler '{route.handler}' uses Python keyword '{segment}' "
                        f"as a module name"
                    ),
                    line=route.line,
                    severity=Severity.ERROR,
                )
            )


def has_errors(errors: list[ValidationError]) -> bool:
    return any(e.severity == Severity.ERROR for e in errors)

