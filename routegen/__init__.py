"""routegen — compile declarative route tables into router builder code."""

from routegen.compiler import compile_routes, expand_source

__version__ = "0.1.0"

__all__ = ["__version__", "compile_routes", "expand_source"]
