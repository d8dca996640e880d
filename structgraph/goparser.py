# structgraph/goparser.py
"""
Go front end built on tree-sitter.

The tree-sitter concrete syntax tree is lowered into the small, closed set of
dataclasses in :mod:`structgraph.syntax`. Only what the graph builder needs is
kept: type declarations, the shapes of their type expressions, and the chain
of container nodes leading down to declarations nested in function bodies.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import tree_sitter_go
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from .errors import ParseError
from .syntax import (
    ArrayOf,
    ChanDir,
    ChanOf,
    Field,
    Ident,
    InterfaceType,
    MapOf,
    Node,
    Pointer,
    Selector,
    SourceFile,
    StructType,
    SyntaxNode,
    TypeExpr,
    TypeSpec,
    Unhandled,
)

__all__ = ["GO_LANGUAGE", "parse_source", "parse_file"]

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

_TYPE_DECLS = ("type_spec", "type_alias")


def parse_source(source: Union[bytes, str], filename: str = "<source>") -> SourceFile:
    """
    Parse Go source text into a :class:`SourceFile`.

    Raises :class:`ParseError` if tree-sitter reports any ERROR or MISSING
    node; the position of the first one is included in the error.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    tree = Parser(GO_LANGUAGE).parse(source)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        row, column = bad.start_point
        if bad.is_missing:
            reason = f"syntax error: missing {bad.type!r}"
        else:
            reason = "syntax error"
        raise ParseError(filename, reason, line=row + 1, column=column + 1)

    package = ""
    kept: List[SyntaxNode] = []
    for child in _named(root):
        if child.type == "package_clause":
            ident = _named(child)
            package = _text(ident[0]) if ident else ""
            continue
        lowered = _lower_node(child)
        if lowered is not None:
            kept.append(lowered)

    return SourceFile(filename=filename, package=package, children=tuple(kept))


def parse_file(path: Path) -> SourceFile:
    """Read `path` and parse it; unreadable files are reported as :class:`ParseError`."""
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as exc:
        raise ParseError(str(path), exc.strerror or str(exc)) from exc
    logger.debug("Parsing %s (%d bytes)", path, len(source))
    return parse_source(source, filename=str(path))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _text(node: TSNode) -> str:
    return node.text.decode("utf-8", errors="replace")


def _named(node: TSNode) -> List[TSNode]:
    return [c for c in node.named_children if c.type != "comment"]


def _first_error(node: TSNode) -> TSNode:
    while not (node.is_error or node.is_missing):
        for child in node.children:
            if child.has_error or child.is_missing:
                node = child
                break
        else:
            return node
    return node


def _lower_node(node: TSNode) -> Optional[SyntaxNode]:
    """
    Lower a statement-level node.

    Returns None for subtrees that contain no type declaration at all so the
    lowered tree only keeps paths that lead somewhere.

    Expression chains can nest thousands of levels deep, so the walk keeps
    its own stack of (node, remaining children, kept children) frames and
    builds each container after its last child has been lowered.
    """
    if node.type in _TYPE_DECLS:
        return _lower_type_spec(node)

    stack: List[Tuple[TSNode, Iterator[TSNode], List[SyntaxNode]]] = [
        (node, iter(_named(node)), [])
    ]
    lowered: Optional[SyntaxNode] = None
    while stack:
        current, pending, kept = stack[-1]
        child = next(pending, None)
        if child is not None:
            if child.type in _TYPE_DECLS:
                kept.append(_lower_type_spec(child))
            else:
                stack.append((child, iter(_named(child)), []))
            continue

        stack.pop()
        lowered = Node(kind=current.type, children=tuple(kept)) if kept else None
        if stack and lowered is not None:
            stack[-1][2].append(lowered)
    return lowered


def _lower_type_spec(node: TSNode) -> TypeSpec:
    name = node.child_by_field_name("name")
    type_node = node.child_by_field_name("type")
    return TypeSpec(
        name=_text(name),
        type=_lower_type(type_node),
        alias=node.type == "type_alias",
    )


def _lower_type(node: TSNode) -> TypeExpr:
    kind = node.type

    if kind == "type_identifier":
        return Ident(_text(node))

    if kind == "pointer_type":
        return Pointer(_lower_type(_named(node)[0]))

    if kind in ("slice_type", "array_type"):
        return ArrayOf(_lower_type(node.child_by_field_name("element")))

    if kind == "map_type":
        return MapOf(
            key=_lower_type(node.child_by_field_name("key")),
            value=_lower_type(node.child_by_field_name("value")),
        )

    if kind == "channel_type":
        return ChanOf(
            dir=_chan_dir(node),
            value=_lower_type(node.child_by_field_name("value")),
        )

    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return Selector(x=Ident(_text(package)), sel=_text(name))

    if kind == "struct_type":
        return StructType(fields=_lower_fields(node))

    if kind == "interface_type":
        return InterfaceType()

    return Unhandled(kind)


def _chan_dir(node: TSNode) -> ChanDir:
    # `<-chan T` starts with the arrow, `chan<- T` has it after the keyword.
    tokens = [c.type for c in node.children if not c.is_named]
    if tokens[:1] == ["<-"]:
        return ChanDir.RECV
    if "<-" in tokens:
        return ChanDir.SEND
    return ChanDir.BOTH


def _lower_fields(struct_node: TSNode) -> Tuple[Field, ...]:
    fields: List[Field] = []
    for body in _named(struct_node):
        if body.type != "field_declaration_list":
            continue
        for decl in _named(body):
            if decl.type != "field_declaration":
                continue
            names = tuple(_text(n) for n in decl.children_by_field_name("name"))
            expr = _lower_type(decl.child_by_field_name("type"))
            # Embedded `*T` carries the star as a bare token, not a pointer_type.
            if not names and any(c.type == "*" for c in decl.children):
                expr = Pointer(expr)
            fields.append(Field(names=names, type=expr))
    return tuple(fields)
