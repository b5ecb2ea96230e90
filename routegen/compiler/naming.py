"""Handler name derivation.

Maps a handler template plus an HTTP method to the concrete handler name:
`paste::paste` with POST becomes `paste::post_paste`.
"""

from __future__ import annotations

from routegen.core.types import Method
from routegen.dsl.ast_nodes import PathTemplate


def derive_handler(template: PathTemplate, method: Method) -> PathTemplate:
    """Prefix the template's last segment with the lowercase method name."""
    return PathTemplate((*template.head, f"{method.binding}_{template.last}"))


def derive_handlers(template: PathTemplate, methods: tuple[Method, ...]) -> list[PathTemplate]:
    """Derive one handler per method, in the given order."""
    return [derive_handler(template, method) for method in methods]
