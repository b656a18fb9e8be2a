"""Command line access to the doctrine registry."""

import argparse
import sys
from typing import List, Optional, Sequence

from .core import (
    ValidationError,
    configure_logging,
    create_container,
    dump_model,
    format_barton_number,
    get_settings,
    require_barton_number,
)
from .doctrine import DoctrineRegistry, HierarchyNode, health_icon


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-lens",
        description="Inspect Barton numbering and doctrine compliance of Repo Lens components.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log registry events at DEBUG level.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser("report", help="Print the compliance report as JSON.")
    report_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indent (defaults to LENS_REPORT_INDENT).",
    )

    subparsers.add_parser("validate", help="Validate every Barton number; exit 1 if any is invalid.")
    subparsers.add_parser("tree", help="Print the component hierarchy.")

    lookup_parser = subparsers.add_parser("lookup", help="Find the component registered under a Barton number.")
    lookup_parser.add_argument("number", help="Dotted Barton number, e.g. 39.01.01.01")

    path_parser = subparsers.add_parser("path", help="Derive Barton numbers from file paths.")
    path_parser.add_argument("paths", nargs="+", help="Slash-delimited file paths")

    return parser


def _render_tree(node: HierarchyNode, depth: int = 0) -> List[str]:
    lines = [f"{'  ' * depth}{health_icon(node.health_status)} {node.barton_number} {node.name} ({node.id})"]
    for child in node.children:
        lines.extend(_render_tree(child, depth + 1))
    return lines


def _run(args: argparse.Namespace, registry: DoctrineRegistry, default_indent: int) -> int:
    if args.command == "path":
        for path in args.paths:
            print(f"{registry.generate_id_from_path(path)}  {path}")
        return 0

    registry.bootstrap()

    if args.command == "report":
        indent = default_indent if args.indent is None else args.indent
        print(dump_model(registry.export_compliance_report(), indent=indent))
        return 0

    if args.command == "validate":
        summary = registry.validate_all_components()
        print(f"valid: {summary.valid}  invalid: {summary.invalid}")
        for error in summary.errors:
            print(f"  {error}")
        return 1 if summary.invalid else 0

    if args.command == "tree":
        for root in registry.get_hierarchy().values():
            print("\n".join(_render_tree(root)))
        return 0

    if args.command == "lookup":
        try:
            parts = require_barton_number(args.number, registry.blueprint_id)
        except ValidationError as e:
            print(f"{args.number}: {e}", file=sys.stderr)
            return 1
        component = registry.get_component_by_barton_number(format_barton_number(*parts))
        if component is None:
            print(f"{args.number}: no component registered", file=sys.stderr)
            return 1
        print(f"{component.barton_number} {component.name} ({component.id}) [{component.type.value}]")
        print(f"  {component.description}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level, settings.json_logs)

    registry = create_container(settings).get(DoctrineRegistry)
    return _run(args, registry, settings.report_indent)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
