"""AST node definitions for the routegen DSL.

These frozen dataclasses form the route table produced by the parser and
consumed by the code generator:

    RouteTable
      -> base expression (optional, opaque)
      -> entries, in source order
          -> NormalRoute (path, handler template, methods)
          -> NestedRoute (mount path, opaque endpoint)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from routegen.core.types import Method


# ---------------------------------------------------------------------------
# Handler templates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PathTemplate:
    """A module-qualified handler name such as ``paste::paste``."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("PathTemplate requires at least one segment")

    @property
    def head(self) -> tuple[str, ...]:
        """Every segment except the last (the module path)."""
        return self.segments[:-1]

    @property
    def last(self) -> str:
        return self.segments[-1]

    def render(self, separator: str = "::") -> str:
        return separator.join(self.segments)

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# Route entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NestedRoute:
    """A `*"/mount" { endpoint }` entry mounting a sub-endpoint."""

    mount_path: str
    endpoint: str  # verbatim code from the block body
    line: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "nested",
            "mount_path": self.mount_path,
            "endpoint": self.endpoint,
            "line": self.line,
        }


@dataclass(frozen=True)
class NormalRoute:
    """A `"/path" handler::template GET POST` entry."""

    path: str
    handler: PathTemplate
    methods: tuple[Method, ...]
    line: int = 0

    def __post_init__(self) -> None:
        if not self.methods:
            raise ValueError(f"Route '{self.path}' requires at least one method")

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "normal",
            "path": self.path,
            "handler": list(self.handler.segments),
            "methods": [m.value for m in self.methods],
            "line": self.line,
        }


RouteEntry = NestedRoute | NormalRoute


# ---------------------------------------------------------------------------
# Root node
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RouteTable:
    """Root of the AST — one complete route-table invocation."""

    entries: tuple[RouteEntry, ...] = field(default_factory=tuple)
    base: str | None = None  # opaque starting expression; None means a fresh router

    @property
    def normal_routes(self) -> list[NormalRoute]:
        return [e for e in self.entries if isinstance(e, NormalRoute)]

    @property
    def nested_routes(self) -> list[NestedRoute]:
        return [e for e in self.entries if isinstance(e, NestedRoute)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteTable:
        entries: list[RouteEntry] = []
        for item in data.get("entries", []):
            if item["kind"] == "nested":
                entries.append(
                    NestedRoute(
                        mount_path=item["mount_path"],
                        endpoint=item["endpoint"],
                        line=item.get("line", 0),
                    )
                )
            elif item["kind"] == "normal":
                entries.append(
                    NormalRoute(
                        path=item["path"],
                        handler=PathTemplate(tuple(item["handler"])),
                        methods=tuple(Method(m) for m in item["methods"]),
                        line=item.get("line", 0),
                    )
                )
            else:
                raise ValueError(f"Unknown route entry kind: {item['kind']!r}")
        return cls(entries=tuple(entries), base=data.get("base"))
