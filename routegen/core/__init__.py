"""routegen core — shared types, enums, and configuration.

    from routegen.core import Method, RouteGenConfig, get_config
"""

from routegen.core.config import RouteGenConfig, get_config, set_config
from routegen.core.types import Method, Severity, ValidationError

__all__ = [
    "Method",
    "RouteGenConfig",
    "Severity",
    "ValidationError",
    "get_config",
    "set_config",
]
