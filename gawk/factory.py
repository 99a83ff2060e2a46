"""
Gawk Factory - Wrapping Host Values in Nodes
============================================

``wrap`` is the entry point of the library: it turns any supported host value
into a node, recursively wrapping list elements and record values with the new
container as their parent.

Wrapping a value that is already a node never creates a second node; it only
adds ``parent`` to that node's parents.
"""

import logging
from typing import Any, Dict, Optional, Type

from .errors import ParentNotANodeError, SelfParentError
from .nodes.base import GawkNode
from .nodes.containers import GawkList, GawkRecord
from .nodes.kinds import UNDEFINED, NodeKind, classify
from .nodes.scalars import (
    GawkBoolean,
    GawkDate,
    GawkFunction,
    GawkNaN,
    GawkNull,
    GawkNumber,
    GawkString,
    GawkUndefined,
)

logger = logging.getLogger(__name__)

NODE_TYPES: Dict[NodeKind, Type[GawkNode]] = {
    NodeKind.UNDEFINED: GawkUndefined,
    NodeKind.NULL: GawkNull,
    NodeKind.BOOLEAN: GawkBoolean,
    NodeKind.NUMBER: GawkNumber,
    NodeKind.NAN: GawkNaN,
    NodeKind.STRING: GawkString,
    NodeKind.DATE: GawkDate,
    NodeKind.FUNCTION: GawkFunction,
    NodeKind.LIST: GawkList,
    NodeKind.RECORD: GawkRecord,
}


def wrap(value: Any = UNDEFINED, parent: Optional[GawkNode] = None) -> GawkNode:
    """
    Wrap a host value in a node.

    Args:
        value: Any supported host value, or an existing node.
        parent: Optional list/record node to notify when the result changes.

    Returns:
        The new node, or ``value`` itself when it already is one.

    Raises:
        SelfParentError: If ``value`` is a node and ``parent`` is that node.
        ParentNotANodeError: If ``parent`` is not a list or record node.
        CircularReferenceError: If ``value`` is already an ancestor of ``parent``.
        UnsupportedTypeError: If ``value`` has no node mapping.
    """
    if parent is not None:
        if isinstance(value, GawkNode) and value is parent:
            raise SelfParentError("The parent must not be the same node as the value")
        if not isinstance(parent, GawkNode) or not parent.kind.is_container:
            raise ParentNotANodeError(
                f"Expected parent to be a list or record node, got {type(parent).__name__}"
            )

    if isinstance(value, GawkNode):
        if parent is not None:
            value._add_parent(parent)
        return value

    kind = classify(value)
    node = NODE_TYPES[kind](value, parent=parent)
    if kind.is_container:
        logger.debug(f"Wrapped {kind.value} with {len(node)} child(ren)")
    return node


def is_gawked(value: Any) -> bool:
    """Return True if ``value`` is a node."""
    return isinstance(value, GawkNode)
