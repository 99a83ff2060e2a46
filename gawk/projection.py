"""
Gawk Projection - Plain Values and JSON
=======================================

Projection strips a node tree of everything observable and returns the host
value it represents. Projections are fresh objects: mutating them never
touches the nodes they came from.

JSON serialization follows the usual rules for values JSON cannot express:

- NaN and infinities become ``null``
- Undefined and function entries are left out of objects and become ``null``
  inside arrays
- dates become ISO 8601 strings
- a top-level Undefined or function has no JSON form at all (``None``)
"""

import datetime
import json
import math
from collections.abc import Mapping
from typing import Any, Optional

from .config import get_config
from .nodes.base import GawkNode
from .nodes.kinds import UNDEFINED

_OMIT = object()


def to_plain_value(value: Any) -> Any:
    """Return the plain projection of a node; other values are returned as-is."""
    if isinstance(value, GawkNode):
        return value.to_plain()
    return value


def _json_ready(value: Any) -> Any:
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            item = _json_ready(item)
            if item is not _OMIT:
                result[str(key)] = item
        return result
    if isinstance(value, (list, tuple)):
        items = [_json_ready(item) for item in value]
        return [None if item is _OMIT else item for item in items]
    if value is UNDEFINED or callable(value):
        return _OMIT
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, datetime.date):
        return value.isoformat()
    return value


def to_json_string(value: Any, pretty: bool = False) -> Optional[str]:
    """
    Serialize the projection of ``value`` to JSON.

    Args:
        value: A node or a plain value.
        pretty: Indent with ``json_indent`` spaces from the active configuration
            instead of producing compact output.

    Returns:
        The JSON text, or None when the value has no JSON form.
    """
    ready = _json_ready(to_plain_value(value))
    if ready is _OMIT:
        return None
    if pretty:
        return json.dumps(ready, indent=get_config().json_indent, ensure_ascii=False)
    return json.dumps(ready, separators=(",", ":"), ensure_ascii=False)
