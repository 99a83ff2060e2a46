"""
Gawk Equality - Structural Deep Equality
========================================

``deep_equal`` is the default ``compare_fn`` used when reconciling lists: two
elements match when their plain projections are structurally equal.

Differences from ``==``:
- nodes are compared through their projections
- ``True`` is not equal to ``1`` (booleans only equal booleans)
- NaN equals NaN
- lists and tuples compare element-wise against each other
"""

import math
from collections.abc import Mapping
from typing import Any


def _plain(value: Any) -> Any:
    from ..nodes.base import GawkNode

    if isinstance(value, GawkNode):
        return value.to_plain()
    return value


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _equal(a: Any, b: Any) -> bool:
    if a is b:
        return True

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if isinstance(a, Mapping) or isinstance(b, Mapping):
        if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
            return False
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not _equal(value, b[key]):
                return False
        return True

    if isinstance(a, (list, tuple)) or isinstance(b, (list, tuple)):
        if not (isinstance(a, (list, tuple)) and isinstance(b, (list, tuple))):
            return False
        return len(a) == len(b) and all(_equal(x, y) for x, y in zip(a, b))

    if _is_nan(a) and _is_nan(b):
        return True

    return a == b


def deep_equal(a: Any, b: Any) -> bool:
    """Return True if ``a`` and ``b`` are structurally equal.

    Either side may be a node, a plain value, or a plain container holding
    nodes.
    """
    return _equal(_unwrap_all(a), _unwrap_all(b))


def _unwrap_all(value: Any) -> Any:
    value = _plain(value)
    if isinstance(value, Mapping):
        return {key: _unwrap_all(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_unwrap_all(item) for item in value]
    return value
