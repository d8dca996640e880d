# structgraph/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .graph import GraphDocument, GraphEdge

__all__ = ["RendererConfig", "build_dot", "edges_to_jsonable", "write_svg"]


@dataclass
class RendererConfig:
    """
    Controls which edges are rendered and how.

    public_only:
        If True, keep only edges whose two ends are exported (upper-case)
        identifiers.
    escape_quotes:
        If True, backslashes and double quotes in names and labels are
        escaped. Off by default: names are written verbatim, so a name
        containing `"` produces invalid DOT.
    """

    public_only: bool = False
    escape_quotes: bool = False


def build_dot(graph: GraphDocument, config: Optional[RendererConfig] = None) -> str:
    """
    Render a :class:`GraphDocument` as a Graphviz digraph.

    This is a pure function: the same edges in the same order always give
    the same text.
    """
    if config is None:
        config = RendererConfig()

    lines: List[str] = ["DiGraph {"]
    for edge in graph.visible_edges(config.public_only):
        left = _quote(edge.left, config)
        right = _quote(edge.right, config)
        attrs = ""
        if edge.label:
            attrs = f' [label="{_quote(edge.label, config)}"]'
        lines.append(f'    "{left}" -> "{right}"{attrs}')
    lines.append("}")
    return "\n".join(lines) + "\n"


def edges_to_jsonable(
    graph: GraphDocument,
    config: Optional[RendererConfig] = None,
) -> List[Dict[str, str]]:
    if config is None:
        config = RendererConfig()
    return [_edge_to_dict(e) for e in graph.visible_edges(config.public_only)]


def write_svg(dot: str, output: Path) -> None:  # pragma: no cover
    """
    Render a DOT string to an SVG file using the `graphviz` package.

    This requires the Graphviz `dot` binary to be installed on the system.
    """
    from graphviz import Source

    src = Source(dot)
    svg_bytes = src.pipe(format="svg")
    output.write_bytes(svg_bytes)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _edge_to_dict(edge: GraphEdge) -> Dict[str, str]:
    return {"left": edge.left, "right": edge.right, "label": edge.label}


def _quote(text: str, config: RendererConfig) -> str:
    if not config.escape_quotes:
        return text
    return text.replace("\\", "\\\\").replace('"', '\\"')
