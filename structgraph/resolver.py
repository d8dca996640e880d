from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .syntax import (
    ArrayOf,
    ChanDir,
    ChanOf,
    Ident,
    InterfaceType,
    MapOf,
    Pointer,
    Selector,
    StructType,
    TypeExpr,
    Unhandled,
)

__all__ = [
    "KindTag",
    "ResolvedType",
    "ANONYMOUS_STRUCT",
    "ANONYMOUS_INTERFACE",
    "resolve_type",
    "expr_name",
]

KindTag = Literal[
    "value",
    "ptr",
    "array",
    "map",
    "selector",
    "chan",
    "struct",
    "interface",
    "unknown",
]

ANONYMOUS_STRUCT = "struct{} (unknown name)"
ANONYMOUS_INTERFACE = "interface (unknown name)"

_CHAN_PREFIX = {
    ChanDir.SEND: "chan<-",
    ChanDir.RECV: "<-chan",
    ChanDir.BOTH: "chan",
}


@dataclass(frozen=True)
class ResolvedType:
    """
    Result of resolving a field's type expression.

    - name : base name with every wrapper stripped (maps and channels keep
             their composed spelling, e.g. `map[string]Widget`)
    - kind : the outermost wrapper only
    """

    name: str
    kind: KindTag


def resolve_type(expr: TypeExpr) -> ResolvedType:
    """
    Resolve a type expression into a base name and a kind tag.

    Total over every shape in :mod:`structgraph.syntax`: anything not
    recognised becomes kind ``"unknown"`` with a name describing the shape.

    Examples
    --------
    >>> resolve_type(Pointer(Ident("Widget")))
    ResolvedType(name='Widget', kind='ptr')
    >>> resolve_type(MapOf(Ident("string"), Pointer(Ident("Widget"))))
    ResolvedType(name='map[string]Widget', kind='map')
    """
    if isinstance(expr, Ident):
        return ResolvedType(expr.name, "value")
    if isinstance(expr, Pointer):
        return ResolvedType(expr_name(expr.x), "ptr")
    if isinstance(expr, ArrayOf):
        return ResolvedType(expr_name(expr.elt), "array")
    if isinstance(expr, MapOf):
        return ResolvedType(expr_name(expr), "map")
    if isinstance(expr, Selector):
        return ResolvedType(expr_name(expr), "selector")
    if isinstance(expr, ChanOf):
        return ResolvedType(expr_name(expr), "chan")
    if isinstance(expr, StructType):
        return ResolvedType(ANONYMOUS_STRUCT, "struct")
    if isinstance(expr, InterfaceType):
        return ResolvedType(ANONYMOUS_INTERFACE, "interface")
    return ResolvedType(f"unhandled ({_shape(expr)})", "unknown")


def expr_name(expr: TypeExpr) -> str:
    """Return the wrapper-transparent name of a (possibly nested) type expression."""
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, Pointer):
        return expr_name(expr.x)
    if isinstance(expr, ArrayOf):
        return expr_name(expr.elt)
    if isinstance(expr, MapOf):
        return f"map[{expr_name(expr.key)}]{expr_name(expr.value)}"
    if isinstance(expr, Selector):
        return f"{expr_name(expr.x)}.{expr.sel}"
    if isinstance(expr, ChanOf):
        return f"{_CHAN_PREFIX[expr.dir]} {expr_name(expr.value)}"
    if isinstance(expr, StructType):
        return ANONYMOUS_STRUCT
    if isinstance(expr, InterfaceType):
        return ANONYMOUS_INTERFACE
    return f"unhandled expr ({_shape(expr)})"


def _shape(expr: object) -> str:
    if isinstance(expr, Unhandled):
        return expr.kind
    return type(expr).__name__
