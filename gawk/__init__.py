"""
Gawk - Observable Value Graphs

Wrap plain data (records, lists, scalars) into a graph of observable nodes.
Listeners registered on any node fire when that node or anything below it
changes, with the originating node passed along as ``source``.

Example:
    ```python
    import gawk

    state = gawk.wrap({"user": {"name": "ada"}, "items": []})
    gawk.watch(state, ["user", "name"], lambda node, source: print(node.val))

    state["user"]["name"].val = "grace"         # prints "grace"
    gawk.merge_deep(state, {"user": {"age": 36}})  # name unchanged, no print
    ```
"""

from typing import Any, Optional

from .config import GawkConfig, configure, get_config, reset_config
from .errors import (
    CircularReferenceError,
    ConfigError,
    GawkError,
    IncompatibleValueError,
    InvalidCompareFunctionError,
    InvalidFilterError,
    InvalidListenerError,
    InvalidMergeSourceError,
    NotANodeError,
    NotificationLoopError,
    ParentNotANodeError,
    ReadOnlyViolationError,
    SelfParentError,
    UnsupportedTypeError,
)
from .factory import is_gawked, wrap
from .nodes import (
    UNDEFINED,
    GawkBoolean,
    GawkContainer,
    GawkDate,
    GawkFunction,
    GawkList,
    GawkNaN,
    GawkNode,
    GawkNull,
    GawkNumber,
    GawkRecord,
    GawkScalar,
    GawkString,
    GawkUndefined,
    NodeKind,
)
from .projection import to_json_string, to_plain_value
from .reconcile import merge, merge_deep, set_value

__version__ = "0.1.0"


def watch(node: Any, filter: Any, callback: Optional[Any] = None) -> GawkNode:
    """Register a listener on ``node``. See :meth:`GawkNode.watch`."""
    if not isinstance(node, GawkNode):
        raise NotANodeError(f"Expected a node to watch, got {type(node).__name__}")
    return node.watch(filter, callback)


def unwatch(node: Any, callback: Optional[Any] = None) -> GawkNode:
    """Remove one listener from ``node``, or all of them without ``callback``."""
    if not isinstance(node, GawkNode):
        raise NotANodeError(f"Expected a node to unwatch, got {type(node).__name__}")
    return node.unwatch(callback)


__all__ = [
    # Graph construction
    "wrap",
    "is_gawked",
    "UNDEFINED",
    "NodeKind",
    # Observation
    "watch",
    "unwatch",
    # Reconciliation
    "set_value",
    "merge",
    "merge_deep",
    # Projection
    "to_plain_value",
    "to_json_string",
    # Node classes
    "GawkNode",
    "GawkScalar",
    "GawkContainer",
    "GawkUndefined",
    "GawkNull",
    "GawkBoolean",
    "GawkNumber",
    "GawkNaN",
    "GawkString",
    "GawkDate",
    "GawkFunction",
    "GawkList",
    "GawkRecord",
    # Configuration
    "GawkConfig",
    "get_config",
    "configure",
    "reset_config",
    # Exceptions
    "GawkError",
    "UnsupportedTypeError",
    "NotANodeError",
    "ParentNotANodeError",
    "CircularReferenceError",
    "SelfParentError",
    "InvalidListenerError",
    "InvalidFilterError",
    "InvalidMergeSourceError",
    "InvalidCompareFunctionError",
    "IncompatibleValueError",
    "ReadOnlyViolationError",
    "NotificationLoopError",
    "ConfigError",
    "__version__",
]
