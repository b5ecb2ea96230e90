"""routegen compiler — turns route tables into router builder chains.

Usage:
    from routegen.compiler import RouteCodeGenerator, compile_routes

    code = compile_routes('{ "/" index GET }')
    code = RouteCodeGenerator(config).generate(table)
"""

from routegen.compiler.expander import ExpansionError, expand_source
from routegen.compiler.generator import CompilationError, RouteCodeGenerator, compile_routes
from routegen.compiler.naming import derive_handler, derive_handlers
from routegen.compiler.serializer import (
    deserialize_from_dict,
    deserialize_from_json,
    serialize_to_dict,
    serialize_to_json,
)

__all__ = [
    "CompilationError",
    "ExpansionError",
    "RouteCodeGenerator",
    "compile_routes",
    "derive_handler",
    "derive_handlers",
    "deserialize_from_dict",
    "deserialize_from_json",
    "expand_source",
    "serialize_to_dict",
    "serialize_to_json",
]
