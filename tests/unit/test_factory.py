"""Unit tests for wrap() classification and parent handling."""

import datetime
import math

import pytest

from gawk import (
    UNDEFINED,
    GawkList,
    GawkRecord,
    NodeKind,
    ParentNotANodeError,
    SelfParentError,
    UnsupportedTypeError,
    is_gawked,
    to_plain_value,
    wrap,
)


@pytest.mark.unit
@pytest.mark.nodes
@pytest.mark.parametrize(
    "value, kind",
    [
        (UNDEFINED, NodeKind.UNDEFINED),
        (None, NodeKind.NULL),
        (True, NodeKind.BOOLEAN),
        (False, NodeKind.BOOLEAN),
        (0, NodeKind.NUMBER),
        (3.5, NodeKind.NUMBER),
        (float("inf"), NodeKind.NUMBER),
        (float("nan"), NodeKind.NAN),
        ("", NodeKind.STRING),
        ("text", NodeKind.STRING),
        ([], NodeKind.LIST),
        ((1, 2), NodeKind.LIST),
        (datetime.date(2020, 1, 1), NodeKind.DATE),
        (datetime.datetime(2020, 1, 1, 12), NodeKind.DATE),
        (len, NodeKind.FUNCTION),
        (lambda: None, NodeKind.FUNCTION),
        ({}, NodeKind.RECORD),
        ({"a": 1}, NodeKind.RECORD),
    ],
)
def test_wrap_classifies_host_values(value, kind):
    """Every supported host value maps to exactly one node kind"""
    assert wrap(value).kind is kind


@pytest.mark.unit
@pytest.mark.nodes
def test_wrap_without_arguments_gives_undefined_node():
    """wrap() with no value wraps UNDEFINED"""
    node = wrap()
    assert node.kind is NodeKind.UNDEFINED
    assert node.val is UNDEFINED


@pytest.mark.unit
@pytest.mark.nodes
@pytest.mark.parametrize("value", [object(), {1, 2}, b"bytes", frozenset()])
def test_wrap_rejects_values_without_node_mapping(value):
    """Values with no node mapping raise UnsupportedTypeError"""
    with pytest.raises(UnsupportedTypeError):
        wrap(value)


@pytest.mark.unit
@pytest.mark.nodes
def test_unsupported_type_error_is_a_type_error():
    """UnsupportedTypeError can be caught as a plain TypeError"""
    with pytest.raises(TypeError):
        wrap(object())


@pytest.mark.unit
@pytest.mark.nodes
def test_wrapping_a_node_returns_the_same_node():
    """Repeated wrap() of a node never creates a duplicate"""
    node = wrap({"a": 1})
    assert wrap(node) is node
    assert wrap(wrap(node)) is node


@pytest.mark.unit
@pytest.mark.nodes
def test_wrapping_a_node_with_parent_adds_parent_edge():
    """wrap(node, parent) only adds a parent link"""
    child = wrap({"x": 1})
    parent = wrap({})

    assert wrap(child, parent) is child
    assert parent in child.parents
    assert len(child.parents) == 1

    # adding the same parent again is idempotent
    wrap(child, parent)
    assert len(child.parents) == 1


@pytest.mark.unit
@pytest.mark.nodes
def test_wrap_rejects_node_as_its_own_parent():
    """wrap(x, x) raises SelfParentError"""
    node = wrap({})
    with pytest.raises(SelfParentError):
        wrap(node, node)


@pytest.mark.unit
@pytest.mark.nodes
@pytest.mark.parametrize("parent", [{}, [], "string", 1])
def test_wrap_rejects_parent_that_is_not_a_node(parent):
    """A plain value is not a valid parent"""
    with pytest.raises(ParentNotANodeError):
        wrap(1, parent)


@pytest.mark.unit
@pytest.mark.nodes
@pytest.mark.parametrize("value", [1, "abc", {"a": 1}, [1, 2]])
def test_plain_value_passed_as_its_own_parent_is_not_a_node(value):
    """wrap(v, v) for a plain v reports the bad parent, not a self-parent"""
    with pytest.raises(ParentNotANodeError):
        wrap(value, value)


@pytest.mark.unit
@pytest.mark.nodes
def test_wrap_rejects_scalar_node_as_parent():
    """Only containers can be parents"""
    with pytest.raises(ParentNotANodeError):
        wrap(1, wrap("not a container"))


@pytest.mark.unit
@pytest.mark.nodes
def test_nested_containers_are_wrapped_recursively():
    """Children of a container are nodes whose parent is the container"""
    doc = wrap({"user": {"name": "ada"}, "tags": ["a", "b"]})

    assert isinstance(doc, GawkRecord)
    user = doc["user"]
    tags = doc["tags"]
    assert isinstance(user, GawkRecord)
    assert isinstance(tags, GawkList)
    assert user.parents == (doc,)
    assert tags.parents == (doc,)
    assert tags[0].parents == (tags,)
    assert user["name"].val == "ada"


@pytest.mark.unit
@pytest.mark.nodes
def test_plain_round_trip():
    """to_plain_value(wrap(v)) equals v for plain data without functions"""
    value = {
        "n": 1,
        "f": 2.5,
        "s": "x",
        "b": False,
        "none": None,
        "list": [1, [2, {"deep": True}]],
        "date": datetime.date(2021, 5, 4),
    }
    assert to_plain_value(wrap(value)) == value


@pytest.mark.unit
@pytest.mark.nodes
def test_plain_round_trip_of_tuple_gives_list():
    """Tuples are lists once wrapped"""
    assert to_plain_value(wrap((1, 2, 3))) == [1, 2, 3]


@pytest.mark.unit
@pytest.mark.nodes
def test_nan_round_trip():
    """A NaN node projects back to NaN"""
    assert math.isnan(to_plain_value(wrap(float("nan"))))


@pytest.mark.unit
@pytest.mark.nodes
def test_is_gawked():
    """is_gawked() distinguishes nodes from plain values"""
    assert is_gawked(wrap(1))
    assert is_gawked(wrap({}))
    assert not is_gawked(1)
    assert not is_gawked({"a": 1})


@pytest.mark.unit
def test_version_is_exposed():
    import gawk

    assert isinstance(gawk.__version__, str)
    assert gawk.__version__.count(".") == 2
