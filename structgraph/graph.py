from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ParseError, UsageError
from .goparser import parse_file
from .resolver import resolve_type
from .syntax import SourceFile, StructType, SyntaxNode, TypeSpec, children

__all__ = [
    "GraphEdge",
    "GraphDocument",
    "UnitResult",
    "SourceConfig",
    "extract_edges",
    "is_public",
    "process_unit",
    "build_graph",
    "collect_graph",
    "iter_source_files",
]

logger = logging.getLogger(__name__)

ParseFn = Callable[[Path], SourceFile]


@dataclass(frozen=True)
class GraphEdge:
    """
    A directed edge from a struct to the type of one of its fields.

    - left  : declared name of the struct
    - right : resolved base name of the field's type
    - label : kind tag from the resolver ("value", "ptr", "map", ...)
    """

    left: str
    right: str
    label: str


@dataclass
class GraphDocument:
    """
    Ordered edge list accumulated over a run.

    Edges are only ever appended; filtering produces a new list and leaves
    the document untouched.
    """

    edges: List[GraphEdge] = field(default_factory=list)

    def extend(self, edges: Iterable[GraphEdge]) -> None:
        self.edges.extend(edges)

    def iter_edges(self) -> List[GraphEdge]:
        return list(self.edges)

    def visible_edges(self, public_only: bool = False) -> List[GraphEdge]:
        if not public_only:
            return list(self.edges)
        return [e for e in self.edges if is_public(e)]

    def __len__(self) -> int:
        return len(self.edges)


@dataclass(frozen=True)
class UnitResult:
    """Outcome of processing one source file: its edges, or the error that stopped it."""

    path: Path
    edges: Tuple[GraphEdge, ...] = ()
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SourceConfig:
    """
    Controls how directory arguments are expanded into `.go` files.

    Files named explicitly on the command line are always used as given.
    """

    follow_symlinks: bool = False
    include_tests: bool = True
    exclude: Sequence[str] = (
        ".git",
        ".hg",
        ".svn",
        "vendor",
        "testdata",
    )


# ---------------------------------------------------------------------------
# Edge extraction
# ---------------------------------------------------------------------------

def extract_edges(tree: SyntaxNode) -> List[GraphEdge]:
    """
    Walk `tree` depth-first and return one edge per field of every struct
    declaration found, in encounter order.

    Declarations nested inside functions and blocks are found as well.
    Non-struct declarations are visited but yield nothing.
    """
    edges: List[GraphEdge] = []
    # explicit stack: a closure deep inside an expression keeps a long container chain
    stack: List[SyntaxNode] = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, TypeSpec) and isinstance(node.type, StructType):
            for f in node.type.fields:
                resolved = resolve_type(f.type)
                edges.append(GraphEdge(left=node.name, right=resolved.name, label=resolved.kind))
        stack.extend(reversed(children(node)))
    return edges


def is_public(edge: GraphEdge) -> bool:
    """
    Return True if both ends of `edge` are exported identifiers, i.e. start
    with an upper-case letter. The label is not considered.
    """
    if not edge.left or not edge.right:
        return False
    return edge.left[0].isupper() and edge.right[0].isupper()


# ---------------------------------------------------------------------------
# Running over files
# ---------------------------------------------------------------------------

def process_unit(path: Path, parse: ParseFn = parse_file) -> UnitResult:
    """Parse one file and extract its edges. Parse failures are returned, not raised."""
    path = Path(path)
    try:
        tree = parse(path)
    except ParseError as exc:
        logger.debug("Failed to parse %s: %s", path, exc)
        return UnitResult(path=path, error=exc)
    edges = extract_edges(tree)
    logger.debug("%s: package %r, %d edges", path, tree.package, len(edges))
    return UnitResult(path=path, edges=tuple(edges))


def build_graph(paths: Iterable[Path], parse: ParseFn = parse_file) -> GraphDocument:
    """
    Process `paths` in order and concatenate their edges.

    Stops at the first file that fails to parse and raises its
    :class:`ParseError`; edges gathered from earlier files are dropped.
    """
    document = GraphDocument()
    for path in paths:
        result = process_unit(path, parse=parse)
        if not result.ok:
            raise result.error
        document.extend(result.edges)
    return document


def collect_graph(
    sources: Sequence[Union[str, Path]],
    config: Optional[SourceConfig] = None,
    parse: ParseFn = parse_file,
) -> GraphDocument:
    """
    Build the graph for the files and directories named in `sources`.

    Raises :class:`UsageError` if `sources` is empty.
    """
    if not sources:
        raise UsageError("Need at least one file name")
    if config is None:
        config = SourceConfig()
    return build_graph(iter_source_files(sources, config), parse=parse)


def iter_source_files(
    sources: Sequence[Union[str, Path]],
    config: SourceConfig,
) -> Iterator[Path]:
    """
    Yield the files to process.

    Plain paths are passed through unchanged (a missing file surfaces later as
    a parse failure). Directories are walked in sorted order.
    """
    for source in sources:
        path = Path(source)
        if not path.is_dir():
            yield path
            continue
        found = 0
        for go_file in _iter_go_files(path, config):
            found += 1
            yield go_file
        logger.debug("Expanded %s to %d .go files", path, found)


def _iter_go_files(root: Path, config: SourceConfig) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root, followlinks=config.follow_symlinks):
        # mutate dirnames in-place to respect exclude list and keep walk order stable
        dirnames[:] = sorted(d for d in dirnames if d not in config.exclude)
        for name in sorted(filenames):
            if not name.endswith(".go"):
                continue
            if not config.include_tests and name.endswith("_test.go"):
                continue
            path = Path(dirpath) / name
            if not config.follow_symlinks and path.is_symlink():
                continue
            yield path
