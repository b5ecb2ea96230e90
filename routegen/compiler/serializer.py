"""Serializer for parsed route tables.

Converts RouteTable objects to/from JSON so a parsed table can be inspected
or handed to other build tooling.
"""

from __future__ import annotations

import json
from typing import Any

from routegen.dsl.ast_nodes import RouteTable


def serialize_to_json(table: RouteTable, indent: int = 2) -> str:
    """Serialize a RouteTable to a JSON string."""
    return json.dumps(table.to_dict(), indent=indent)


def deserialize_from_json(json_str: str) -> RouteTable:
    """Deserialize a RouteTable from a JSON string."""
    data = json.loads(json_str)
    return RouteTable.from_dict(data)


def serialize_to_dict(table: RouteTable) -> dict[str, Any]:
    """Convert a RouteTable to a plain dictionary."""
    return table.to_dict()


def deserialize_from_dict(data: dict[str, Any]) -> RouteTable:
    """Reconstruct a RouteTable from a plain dictionary."""
    return RouteTable.from_dict(data)
