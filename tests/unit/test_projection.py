"""Unit tests for plain and JSON projection."""

import datetime
import json

import pytest

from gawk import UNDEFINED, configure, to_json_string, to_plain_value, wrap


@pytest.mark.unit
@pytest.mark.projection
def test_plain_projection_is_detached_from_the_graph():
    """Mutating a projection never touches the nodes"""
    doc = wrap({"items": [1, 2]})
    plain = to_plain_value(doc)
    plain["items"].append(3)

    assert doc.to_plain() == {"items": [1, 2]}


@pytest.mark.unit
@pytest.mark.projection
def test_to_plain_value_passes_plain_values_through():
    value = {"a": 1}
    assert to_plain_value(value) is value


@pytest.mark.unit
@pytest.mark.projection
def test_json_compact_and_pretty():
    doc = wrap({"a": [1, "x"], "b": None})

    assert to_json_string(doc) == '{"a":[1,"x"],"b":null}'
    assert doc.to_json() == '{"a":[1,"x"],"b":null}'
    assert to_json_string(doc, pretty=True) == json.dumps(
        {"a": [1, "x"], "b": None}, indent=2
    )


@pytest.mark.unit
@pytest.mark.projection
def test_pretty_indent_follows_configuration():
    configure(json_indent=4)
    assert to_json_string(wrap({"a": 1}), pretty=True) == '{\n    "a": 1\n}'


@pytest.mark.unit
@pytest.mark.projection
def test_json_of_values_without_json_form():
    """NaN/inf become null; undefined and functions are dropped or nulled"""
    doc = wrap(
        {
            "nan": float("nan"),
            "inf": float("-inf"),
            "undef": UNDEFINED,
            "fn": len,
            "list": [UNDEFINED, len, 1],
        }
    )
    assert json.loads(to_json_string(doc)) == {
        "nan": None,
        "inf": None,
        "list": [None, None, 1],
    }


@pytest.mark.unit
@pytest.mark.projection
def test_json_of_dates_uses_iso_format():
    doc = wrap({"d": datetime.date(2020, 2, 29), "t": datetime.datetime(2020, 1, 1, 8, 30)})
    assert json.loads(doc.to_json()) == {"d": "2020-02-29", "t": "2020-01-01T08:30:00"}


@pytest.mark.unit
@pytest.mark.projection
def test_top_level_function_or_undefined_has_no_json():
    assert to_json_string(wrap(len)) is None
    assert wrap().to_json() is None


@pytest.mark.unit
@pytest.mark.projection
def test_json_keeps_non_ascii_text():
    assert to_json_string(wrap("héllo")) == '"héllo"'
