"""
Gawk Ancestry - Parent-Cycle Detection
======================================

Parent links form a DAG: a node may be held by several containers, but no node
may ever become its own ancestor. Adding a parent edge ``child -> parent``
would close a cycle exactly when ``child`` is already reachable by walking up
from ``parent``, so the check is a DFS over parent links.

Usage:
    if would_create_cycle(child, parent):
        raise CircularReferenceError(...)
"""

from typing import TYPE_CHECKING, Iterator, List, Set

if TYPE_CHECKING:
    from ..nodes.base import GawkNode


def iter_ancestors(node: "GawkNode") -> Iterator["GawkNode"]:
    """Yield every node reachable through parent links, each once."""
    visited: Set[int] = set()
    stack: List["GawkNode"] = list(node.parents)
    while stack:
        current = stack.pop()
        if id(current) in visited:
            continue
        visited.add(id(current))
        yield current
        stack.extend(current.parents)


def would_create_cycle(child: "GawkNode", parent: "GawkNode") -> bool:
    """
    Check if adding ``parent`` to ``child``'s parents would create a cycle.

    Args:
        child: The node that would gain a parent
        parent: The container that would hold it

    Returns:
        True if ``child`` is ``parent`` or already one of its ancestors
    """
    if child is parent:
        return True
    if not child.kind.is_container:
        # leaves cannot hold anything, so they cannot be anyone's ancestor
        return False
    return any(ancestor is child for ancestor in iter_ancestors(parent))
