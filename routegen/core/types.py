"""Core data types for routegen.

Shared enums and records used across the DSL, validator, and compiler layers.
Every record is JSON-serializable via its to_dict method.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Method(str, Enum):
    """HTTP methods accepted in a normal route."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def binding(self) -> str:
        """Lowercase name used for handler prefixes and bind calls."""
        return self.value.lower()


class Severity(str, Enum):
    """Validation severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A semantic issue found in a parsed route table."""

    message: str
    line: int = 0
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "line": self.line,
            "severity": self.severity.value,
        }
