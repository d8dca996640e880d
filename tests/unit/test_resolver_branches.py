import pytest

from structgraph.resolver import ANONYMOUS_INTERFACE, ANONYMOUS_STRUCT, expr_name, resolve_type
from structgraph.syntax import (
    ArrayOf,
    ChanDir,
    ChanOf,
    Field,
    Ident,
    InterfaceType,
    MapOf,
    Pointer,
    Selector,
    StructType,
    Unhandled,
)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (ChanDir.SEND, "chan<- Msg"),
        (ChanDir.RECV, "<-chan Msg"),
        (ChanDir.BOTH, "chan Msg"),
    ],
)
def test_channel_direction_prefix(direction, expected) -> None:
    resolved = resolve_type(ChanOf(direction, Pointer(Ident("Msg"))))
    assert resolved.name == expected
    assert resolved.kind == "chan"


def test_nested_wrappers_report_outermost_kind_only() -> None:
    # []*[]**T
    expr = ArrayOf(Pointer(ArrayOf(Pointer(Pointer(Ident("T"))))))
    assert resolve_type(expr).name == "T"
    assert resolve_type(expr).kind == "array"

    expr = Pointer(ArrayOf(Ident("T")))
    assert resolve_type(expr).kind == "ptr"


def test_map_key_and_value_resolve_to_base_names() -> None:
    expr = MapOf(Selector(Ident("uuid"), "UUID"), ArrayOf(MapOf(Ident("int"), Pointer(Ident("Node")))))
    assert resolve_type(expr).name == "map[uuid.UUID]map[int]Node"


def test_array_of_map_keeps_map_spelling() -> None:
    resolved = resolve_type(ArrayOf(MapOf(Ident("string"), Ident("int"))))
    assert resolved.name == "map[string]int"
    assert resolved.kind == "array"


def test_pointer_to_selector() -> None:
    resolved = resolve_type(Pointer(Selector(Ident("sync"), "Mutex")))
    assert resolved.name == "sync.Mutex"
    assert resolved.kind == "ptr"


def test_nested_anonymous_shapes_use_placeholders() -> None:
    inner = StructType(fields=(Field(names=("X",), type=Ident("int")),))
    assert resolve_type(ArrayOf(inner)).name == ANONYMOUS_STRUCT
    assert resolve_type(Pointer(InterfaceType())).name == ANONYMOUS_INTERFACE
    assert resolve_type(MapOf(Ident("string"), InterfaceType())).name == f"map[string]{ANONYMOUS_INTERFACE}"


def test_nested_unhandled_shape_uses_expr_diagnostic() -> None:
    resolved = resolve_type(Pointer(Unhandled("generic_type")))
    assert resolved.name == "unhandled expr (generic_type)"
    assert resolved.kind == "ptr"


def test_expr_name_matches_resolve_for_every_shape() -> None:
    shapes = [
        Ident("A"),
        Pointer(Ident("A")),
        ArrayOf(Ident("A")),
        MapOf(Ident("K"), Ident("V")),
        Selector(Ident("p"), "A"),
        ChanOf(ChanDir.BOTH, Ident("A")),
        StructType(),
        InterfaceType(),
    ]
    for shape in shapes:
        assert resolve_type(shape).name == expr_name(shape)


def test_resolved_name_is_never_empty() -> None:
    for shape in (Unhandled(""), Pointer(Unhandled("x")), StructType(), InterfaceType()):
        assert resolve_type(shape).name
