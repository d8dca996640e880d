# structgraph/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .errors import ParseError, UsageError
from .graph import SourceConfig, collect_graph
from .renderer import RendererConfig, build_dot, edges_to_jsonable, write_svg


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structgraph",
        description=(
            "Read Go source files and draw how struct types refer to each other "
            "through their fields, as a Graphviz digraph."
        ),
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="Go source files, or directories to scan for .go files.",
    )
    parser.add_argument(
        "--public",
        action="store_true",
        help="Only consider public identifiers (names starting with an upper-case letter).",
    )
    parser.add_argument(
        "--format",
        choices=("dot", "json", "svg"),
        default="dot",
        help="Output format: 'dot' (Graphviz DOT), 'json' (edge list), or 'svg'. Default: dot.",
    )
    parser.add_argument(
        "--exclude-tests",
        action="store_true",
        help="Skip *_test.go files when scanning directories.",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links to files and directories when scanning directories.",
    )
    parser.add_argument(
        "--escape-quotes",
        action="store_true",
        help="Escape double quotes and backslashes in node names and labels.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path. DOT and JSON go to stdout when omitted; SVG defaults to structgraph.svg.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output.",
    )
    return parser


def main(argv: Any | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("structgraph").setLevel(logging.DEBUG)

    source_cfg = SourceConfig(
        follow_symlinks=args.follow_symlinks,
        include_tests=not args.exclude_tests,
    )
    renderer_cfg = RendererConfig(
        public_only=args.public,
        escape_quotes=args.escape_quotes,
    )

    try:
        graph = collect_graph(args.sources, source_cfg)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        text = json.dumps(edges_to_jsonable(graph, renderer_cfg), indent=2, ensure_ascii=False) + "\n"
        return _emit(text, args.output, "JSON")

    dot = build_dot(graph, renderer_cfg)

    if args.format == "dot":
        return _emit(dot, args.output, "DOT")

    # args.format == "svg"
    output = Path(args.output) if args.output else Path("structgraph.svg")
    write_svg(dot, output)
    print(f"Wrote SVG to {output}")
    return 0


def _emit(text: str, output: str | None, what: str) -> int:
    if output is None:
        sys.stdout.write(text)
        return 0
    path = Path(output)
    path.write_text(text, encoding="utf-8")
    print(f"Wrote {what} to {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
