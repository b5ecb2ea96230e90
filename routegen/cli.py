"""routegen CLI — compile declarative route tables into router builder code.

Usage:
    routegen compile <routes_file> [--output <path>] [--layout inline|multiline]
    routegen expand <template_file> [--output <path>]
    routegen check <routes_file>
    routegen show <routes_file>
    routegen parse <routes_file> [--output <path>]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from routegen import __version__
from routegen.core.config import LAYOUTS, RouteGenConfig, get_config
from routegen.core.types import Severity
from routegen.dsl.errors import RouteSyntaxError

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routegen",
        description="routegen: compile declarative route tables into router builder code",
    )
    parser.add_argument("--version", action="version", version=f"routegen {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- compile ---
    compile_parser = subparsers.add_parser("compile", help="Generate a builder chain")
    compile_parser.add_argument("routes_file", type=str, help="Path to route table file")
    compile_parser.add_argument(
        "--output", "-o", type=str, default=None, help="Write code here instead of stdout"
    )
    _add_render_options(compile_parser)

    # --- expand ---
    expand_parser = subparsers.add_parser(
        "expand", help="Expand define_routes!(...) invocations in a Python template"
    )
    expand_parser.add_argument("template_file", type=str, help="Path to template file")
    expand_parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output path (default: template path without its last suffix)",
    )
    _add_render_options(expand_parser)

    # --- check ---
    check_parser = subparsers.add_parser("check", help="Parse and validate a route table")
    check_parser.add_argument("routes_file", type=str, help="Path to route table file")

    # --- show ---
    show_parser = subparsers.add_parser("show", help="Display a route table")
    show_parser.add_argument("routes_file", type=str, help="Path to route table file")

    # --- parse ---
    parse_parser = subparsers.add_parser("parse", help="Dump the parsed route table as JSON")
    parse_parser.add_argument("routes_file", type=str, help="Path to route table file")
    parse_parser.add_argument("--output", "-o", type=str, default=None, help="Output JSON path")

    return parser


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--layout", choices=LAYOUTS, default=None, help="Chain layout")
    parser.add_argument(
        "--router-factory", type=str, default=None, help="Expression for an empty router"
    )
    parser.add_argument(
        "--method-namespace", type=str, default=None, help="Module holding get/post/... helpers"
    )


def _resolve_config(args: argparse.Namespace) -> RouteGenConfig:
    overrides = {
        key: value
        for key, value in (
            ("layout", args.layout),
            ("router_factory", args.router_factory),
            ("method_namespace", args.method_namespace),
        )
        if value is not None
    }
    return dataclasses.replace(get_config(), **overrides)


def _read_source(path_str: str) -> str | None:
    path = Path(path_str)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: Cannot read {path}: {exc}", file=sys.stderr)
        return None


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile a route table file into a builder-chain expression."""
    from routegen.compiler.generator import compile_routes

    source = _read_source(args.routes_file)
    if source is None:
        return 1

    code = compile_routes(source, _resolve_config(args))

    if args.output:
        Path(args.output).write_text(code + "\n", encoding="utf-8")
        print(f"Written to: {args.output}")
    else:
        print(code)
    return 0


def cmd_expand(args: argparse.Namespace) -> int:
    """Expand every macro invocation in a Python template file."""
    from routegen.compiler.expander import expand_source

    source = _read_source(args.template_file)
    if source is None:
        return 1

    config = _resolve_config(args)
    output = args.output
    if output is None:
        target = Path(args.template_file).with_suffix("")
        if not target.suffix:
            target = target.with_name(target.name + config.output_suffix)
        output = str(target)

    if Path(output).resolve() == Path(args.template_file).resolve():
        print(
            f"Error: Expanding {args.template_file} would overwrite it; pass --output",
            file=sys.stderr,
        )
        return 1

    Path(output).write_text(expand_source(source, config), encoding="utf-8")
    print(f"Expanded {args.template_file} -> {output}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Parse and validate a route table, reporting diagnostics."""
    from routegen.dsl.parser import parse_routes
    from routegen.dsl.validator import has_errors, validate_routes

    source = _read_source(args.routes_file)
    if source is None:
        return 1

    table = parse_routes(source)
    errors = validate_routes(table)
    for e in errors:
        stream = sys.stderr if e.severity == Severity.ERROR else sys.stdout
        print(f"  [{e.severity.value}] line {e.line}: {e.message}", file=stream)

    if has_errors(errors):
        return 1
    print(f"OK: {len(table.entries)} route entries")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Render a route table as a terminal table."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from routegen.compiler.naming import derive_handlers
    from routegen.dsl.ast_nodes import NestedRoute
    from routegen.dsl.parser import parse_routes

    source = _read_source(args.routes_file)
    if source is None:
        return 1

    table = parse_routes(source)
    separator = get_config().path_separator

    view = Table(title=f"Routes ({escape(table.base or 'new router')})")
    view.add_column("Line", justify="right", style="dim")
    view.add_column("Kind")
    view.add_column("Path", style="cyan")
    view.add_column("Methods", style="green")
    view.add_column("Target")

    for entry in table.entries:
        if isinstance(entry, NestedRoute):
            view.add_row(
                str(entry.line), "nest", escape(entry.mount_path), "*", escape(entry.endpoint)
            )
        else:
            handlers = derive_handlers(entry.handler, entry.methods)
            view.add_row(
                str(entry.line),
                "at",
                escape(entry.path),
                " ".join(m.value for m in entry.methods),
                ", ".join(h.render(separator) for h in handlers),
            )

    Console().print(view)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """Dump the parsed route table as JSON."""
    from routegen.compiler.serializer import serialize_to_json
    from routegen.dsl.parser import parse_routes

    source = _read_source(args.routes_file)
    if source is None:
        return 1

    text = serialize_to_json(parse_routes(source))
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Written to: {args.output}")
    else:
        print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    logger.debug("Running command %s", args.command)

    dispatch = {
        "compile": cmd_compile,
        "expand": cmd_expand,
        "check": cmd_check,
        "show": cmd_show,
        "parse": cmd_parse,
    }

    from routegen.compiler.generator import CompilationError

    try:
        return dispatch[args.command](args)
    except (RouteSyntaxError, CompilationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
