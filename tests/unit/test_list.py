"""Unit tests for list node mutators."""

import pytest

from gawk import GawkList, IncompatibleValueError, NodeKind, wrap


def _plain(nodes):
    return [node.val for node in nodes]


@pytest.mark.unit
@pytest.mark.nodes
def test_push_appends_and_returns_length(recorder, calls):
    """push() adopts items and notifies once for all of them"""
    items = wrap([1])
    items.watch(recorder)

    assert items.push(2, 3) == 3

    assert items.val == [1, 2, 3]
    assert all(node.parents == (items,) for node in items)
    assert calls == [(items, items)]


@pytest.mark.unit
@pytest.mark.nodes
def test_pop_and_shift_detach_removed_nodes():
    """pop()/shift() return the removed node with its parent link dropped"""
    items = wrap(["a", "b", "c"])
    first, last = items[0], items[2]

    assert items.pop() is last
    assert items.shift() is first
    assert items.val == ["b"]
    assert last.parents == ()
    assert first.parents == ()


@pytest.mark.unit
@pytest.mark.nodes
def test_pop_and_shift_on_empty_list_return_none(recorder, calls):
    items = wrap([])
    items.watch(recorder)
    assert items.pop() is None
    assert items.shift() is None
    assert calls == []


@pytest.mark.unit
@pytest.mark.nodes
def test_unshift_prepends():
    items = wrap([3])
    assert items.unshift(1, 2) == 3
    assert items.val == [1, 2, 3]


@pytest.mark.unit
@pytest.mark.nodes
def test_splice_replaces_range_with_single_notification(recorder, calls):
    """Mutating many elements with one splice notifies exactly once"""
    items = wrap([0, 1, 2, 3, 4])
    items.watch(recorder)
    old = items[1:4]

    removed = items.splice(1, 3, "a", "b", "c", "d")

    assert removed == old
    assert items.val == [0, "a", "b", "c", "d", 4]
    assert all(node.parents == () for node in old)
    assert len(calls) == 1


@pytest.mark.unit
@pytest.mark.nodes
def test_splice_without_delete_count_removes_to_end():
    items = wrap([0, 1, 2, 3])
    removed = items.splice(2)
    assert _plain(removed) == [2, 3]
    assert items.val == [0, 1]


@pytest.mark.unit
@pytest.mark.nodes
def test_splice_without_arguments_does_nothing(recorder, calls):
    items = wrap([1, 2])
    items.watch(recorder)
    assert items.splice() == []
    assert items.val == [1, 2]
    assert calls == []


@pytest.mark.unit
@pytest.mark.nodes
@pytest.mark.parametrize(
    "start, delete_count, inserted, expected_removed, expected",
    [
        (-10, 1, [], [0], [1, 2]),
        (10, 1, ["x"], [], [0, 1, 2, "x"]),
        (1, -5, ["x"], [], [0, "x", 1, 2]),
        (1, 100, ["x"], [1, 2], [0, "x"]),
    ],
)
def test_splice_clamps_out_of_range_arguments(
    start, delete_count, inserted, expected_removed, expected
):
    """start and delete_count are clamped to the list bounds"""
    items = wrap([0, 1, 2])
    removed = items.splice(start, delete_count, *inserted)
    assert _plain(removed) == expected_removed
    assert items.val == expected


@pytest.mark.unit
@pytest.mark.nodes
def test_fill_overwrites_range_with_single_notification(recorder, calls):
    """fill() writes a fresh node per slot and notifies once"""
    items = wrap([1, 2, 3, 4])
    items.watch(recorder)
    replaced = items[1:3]

    assert items.fill(0, 1, 3) is items

    assert items.val == [1, 0, 0, 4]
    assert items[1] is not items[2]
    assert all(node.parents == () for node in replaced)
    assert len(calls) == 1


@pytest.mark.unit
@pytest.mark.nodes
def test_fill_with_node_shares_it():
    """A node passed to fill() is stored in every slot"""
    shared = wrap({"k": 1})
    items = wrap([None, None])
    items.fill(shared)
    assert items[0] is shared and items[1] is shared
    assert shared.parents == (items,)


@pytest.mark.unit
@pytest.mark.nodes
def test_fill_with_empty_range_does_not_notify(recorder, calls):
    items = wrap([1, 2])
    items.watch(recorder)
    items.fill(9, 2, 1)
    items.fill(9, 5)
    assert items.val == [1, 2]
    assert calls == []


@pytest.mark.unit
@pytest.mark.nodes
def test_get_set_delete_by_index():
    """Index accessors accept negative indices; set at length appends"""
    items = wrap(["a", "b"])

    assert items.get(0).val == "a"
    assert items.get(-1).val == "b"
    assert items.get(5) is None

    items.set(1, "B")
    items.set(2, "c")
    assert items.val == ["a", "B", "c"]

    with pytest.raises(IndexError):
        items.set(10, "z")

    removed = items.delete(0)
    assert removed.val == "a"
    assert items.val == ["B", "c"]
    assert items.delete(10) is None


@pytest.mark.unit
@pytest.mark.nodes
def test_set_same_kind_keeps_element_node(recorder, calls):
    """Writing a same-kind value updates the element in place"""
    items = wrap([1, 2])
    element = items[0]
    element.watch(recorder)

    items[0] = 10

    assert items[0] is element
    assert element.val == 10
    assert calls == [(element, element)]


@pytest.mark.unit
@pytest.mark.nodes
def test_length_and_sequence_protocol():
    items = wrap([1, 2, 3])
    assert items.length == 3
    assert len(items) == 3
    assert [node.val for node in items] == [1, 2, 3]
    assert _plain(items[::2]) == [1, 3]
    del items[0]
    assert items.val == [2, 3]
    with pytest.raises(IndexError):
        del items[10]


@pytest.mark.unit
@pytest.mark.nodes
def test_child_lookup_accepts_decimal_strings_only():
    """Path steps into lists are decimal index strings or ints"""
    items = wrap(["a", "b"])
    assert items.child("1").val == "b"
    assert items.child(1).val == "b"
    assert items.child("-1") is None
    assert items.child("1.0") is None
    assert items.child(True) is None
    assert items.child("2") is None


@pytest.mark.unit
@pytest.mark.nodes
def test_list_val_reconciles_and_rejects_records():
    items = wrap([1, 2])
    items.val = [3]
    assert items.val == [3]
    assert items.kind is NodeKind.LIST
    with pytest.raises(IncompatibleValueError):
        items.val = {"a": 1}


@pytest.mark.unit
@pytest.mark.nodes
def test_list_to_string_joins_elements():
    assert str(wrap([1, "a", [2, 3]])) == "1,a,2,3"


@pytest.mark.unit
@pytest.mark.nodes
def test_list_rejects_non_sequence_value():
    with pytest.raises(IncompatibleValueError):
        GawkList({"a": 1})
