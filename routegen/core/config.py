"""Global configuration for routegen.

Controls how generated builder chains are rendered: which expression starts
an empty router, how handler paths are joined, and how the chain is laid out.
Settings can be overridden via environment variables or explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

LAYOUTS = ("inline", "multiline")


@dataclass
class RouteGenConfig:
    """Top-level configuration for routegen."""

    # Builder chain
    router_factory: str = "Route()"
    method_namespace: str = ""
    path_separator: str = "."

    # Layout
    layout: str = "inline"
    indent: int = 4

    # Template expansion
    macro_name: str = "define_routes!"
    output_suffix: str = ".py"

    def __post_init__(self) -> None:
        if self.layout not in LAYOUTS:
            raise ValueError(f"Unknown layout {self.layout!r} (expected one of {LAYOUTS})")
        if self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")

    @property
    def method_prefix(self) -> str:
        """Prefix for the head method call, e.g. ``poem.`` or empty."""
        return f"{self.method_namespace}." if self.method_namespace else ""

    @classmethod
    def from_env(cls) -> RouteGenConfig:
        """Build config from environment variables, falling back to defaults."""
        kwargs: dict[str, object] = {}

        if val := os.environ.get("ROUTEGEN_ROUTER_FACTORY"):
            kwargs["router_factory"] = val
        if val := os.environ.get("ROUTEGEN_METHOD_NAMESPACE"):
            kwargs["method_namespace"] = val
        if val := os.environ.get("ROUTEGEN_PATH_SEPARATOR"):
            kwargs["path_separator"] = val
        if val := os.environ.get("ROUTEGEN_LAYOUT"):
            kwargs["layout"] = val
        if val := os.environ.get("ROUTEGEN_INDENT"):
            kwargs["indent"] = int(val)
        if val := os.environ.get("ROUTEGEN_MACRO_NAME"):
            kwargs["macro_name"] = val

        return cls(**kwargs)  # type: ignore[arg-type]


# Module-level singleton
_config: RouteGenConfig | None = None


def get_config() -> RouteGenConfig:
    """Return the global routegen config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = RouteGenConfig.from_env()
    return _config


def set_config(config: RouteGenConfig | None) -> None:
    """Override the global config (useful in tests). Pass None to reset."""
    global _config
    _config = config
