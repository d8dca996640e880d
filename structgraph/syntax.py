from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

__all__ = [
    "ChanDir",
    "Ident",
    "Pointer",
    "ArrayOf",
    "MapOf",
    "ChanOf",
    "Selector",
    "StructType",
    "InterfaceType",
    "Unhandled",
    "TypeExpr",
    "Field",
    "TypeSpec",
    "Node",
    "SourceFile",
    "SyntaxNode",
    "children",
]


class ChanDir(Enum):
    SEND = "send"
    RECV = "recv"
    BOTH = "both"


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ident:
    """A plain type name, e.g. `int` or `Widget`."""

    name: str


@dataclass(frozen=True)
class Pointer:
    x: "TypeExpr"


@dataclass(frozen=True)
class ArrayOf:
    """Both fixed-length arrays and slices; the length is not kept."""

    elt: "TypeExpr"


@dataclass(frozen=True)
class MapOf:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class ChanOf:
    dir: ChanDir
    value: "TypeExpr"


@dataclass(frozen=True)
class Selector:
    """A package-qualified name such as `time.Duration`."""

    x: "TypeExpr"
    sel: str


@dataclass(frozen=True)
class StructType:
    fields: Tuple["Field", ...] = ()


@dataclass(frozen=True)
class InterfaceType:
    pass


@dataclass(frozen=True)
class Unhandled:
    """
    Any type shape outside the set above (function types, generic
    instantiations, parenthesized types, ...).

    `kind` is the parser's own name for the node.
    """

    kind: str


TypeExpr = Union[
    Ident,
    Pointer,
    ArrayOf,
    MapOf,
    ChanOf,
    Selector,
    StructType,
    InterfaceType,
    Unhandled,
]


# ---------------------------------------------------------------------------
# Declarations and containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Field:
    """
    One field declaration of a struct.

    `names` is empty for embedded fields and holds several names for
    `A, B int`.
    """

    names: Tuple[str, ...]
    type: TypeExpr


@dataclass(frozen=True)
class TypeSpec:
    """`type Name <type>`; `alias` is True for `type Name = <type>`."""

    name: str
    type: TypeExpr
    alias: bool = False


@dataclass(frozen=True)
class Node:
    """
    Any other syntax node, kept only so that declarations nested inside
    function bodies, closures or blocks stay reachable.
    """

    kind: str
    children: Tuple["SyntaxNode", ...] = ()


@dataclass(frozen=True)
class SourceFile:
    filename: str
    package: str
    children: Tuple["SyntaxNode", ...] = ()


SyntaxNode = Union[TypeExpr, Field, TypeSpec, Node, SourceFile]


def children(node: SyntaxNode) -> Tuple[SyntaxNode, ...]:
    """Return the direct children of `node` in source order."""
    if isinstance(node, (SourceFile, Node)):
        return node.children
    if isinstance(node, TypeSpec):
        return (node.type,)
    if isinstance(node, Field):
        return (node.type,)
    if isinstance(node, StructType):
        return node.fields
    if isinstance(node, Pointer):
        return (node.x,)
    if isinstance(node, ArrayOf):
        return (node.elt,)
    if isinstance(node, MapOf):
        return (node.key, node.value)
    if isinstance(node, ChanOf):
        return (node.value,)
    if isinstance(node, Selector):
        return (node.x,)
    # Ident, InterfaceType, Unhandled
    return ()
