"""Command line interface for sql-diagram."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from sql_diagram.analyzer import to_json
from sql_diagram.examples import example_names, get_example
from sql_diagram.exporters import EXPORT_FORMATS, export_graph
from sql_diagram.graph import build_graph

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the SQL source arguments shared by every subcommand."""

    parser.add_argument("--sql", help="SQL string to analyze")
    parser.add_argument("--file", help="Path to SQL file")
    parser.add_argument(
        "--example", choices=example_names(), help="Analyze a bundled example query"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SQL SELECT diagram analyzer")
    parser.add_argument(
        "--verbose", action="store_true", help="Log pipeline details to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze tables, columns and joins"
    )
    _add_input_arguments(analyze_parser)

    export_parser = subparsers.add_parser("export", help="Export the table diagram")
    _add_input_arguments(export_parser)
    export_parser.add_argument(
        "--format",
        default="json",
        choices=EXPORT_FORMATS,
        help="Export format: json, mermaid_er, graphviz_dot",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SQL diagram CLI."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )

    if args.command == "analyze":
        sql = _read_sql(args, parser)
        sys.stdout.write(to_json(sql))
        sys.stdout.write("\n")
        return 0
    if args.command == "export":
        sql = _read_sql(args, parser)
        sys.stdout.write(export_graph(build_graph(sql), format=args.format))
        sys.stdout.write("\n")
        return 0

    parser.print_help()
    return 2


def _read_file(path: str) -> str:
    """Read SQL from a file path."""

    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def _read_sql(args: argparse.Namespace, parser: argparse.ArgumentParser) -> str:
    """Resolve SQL from CLI arguments."""

    if args.file:
        return _read_file(args.file)
    if args.sql:
        return args.sql
    if args.example:
        return get_example(args.example)
    parser.error("Provide a SQL string, --file path or --example name")
    return ""


if __name__ == "__main__":
    raise SystemExit(main())
