from .errors import ParseError, UsageError

from .resolver import KindTag, ResolvedType, expr_name, resolve_type

from .goparser import parse_file, parse_source

from .graph import (
    GraphDocument,
    GraphEdge,
    SourceConfig,
    UnitResult,
    build_graph,
    collect_graph,
    extract_edges,
    is_public,
    process_unit,
)

from .renderer import RendererConfig, build_dot, edges_to_jsonable, write_svg

__all__ = [
    "ParseError",
    "UsageError",
    "KindTag",
    "ResolvedType",
    "expr_name",
    "resolve_type",
    "parse_file",
    "parse_source",
    "GraphDocument",
    "GraphEdge",
    "SourceConfig",
    "UnitResult",
    "build_graph",
    "collect_graph",
    "extract_edges",
    "is_public",
    "process_unit",
    "RendererConfig",
    "build_dot",
    "edges_to_jsonable",
    "write_svg",
]

__version__ = "0.1.0"
