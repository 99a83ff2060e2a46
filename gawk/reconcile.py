"""
Gawk Reconciliation - set_value, merge and merge_deep
=====================================================

These operations update an existing node tree to match new data while keeping
the subscriptions people already hold on it:

- ``set_value(dest, value)`` replaces the content of ``dest``. Children of the
  same kind are updated in place; list elements are matched against the old
  elements with ``compare_fn`` and inherit the listeners of their match.
- ``merge(dest, *sources)`` assigns every key of every source into ``dest``.
- ``merge_deep(dest, *sources)`` does the same but unions nested records
  instead of replacing them. Lists are always replaced, never merged.

Each operation runs inside a single pause/resume bracket on the destination,
so every ancestor sees exactly one notification no matter how many
descendants changed, and no listener observes a half-applied update.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from .errors import InvalidCompareFunctionError, InvalidMergeSourceError
from .factory import wrap
from .nodes.base import GawkNode
from .nodes.containers import GawkList, GawkRecord
from .nodes.kinds import NodeKind, classify
from .util.equality import deep_equal

logger = logging.getLogger(__name__)

CompareFn = Callable[[GawkNode, GawkNode], bool]


def _resolve_compare(compare_fn: Optional[CompareFn]) -> CompareFn:
    if compare_fn is None:
        return deep_equal
    if not callable(compare_fn):
        raise InvalidCompareFunctionError("Expected compare callback to be a function")
    return compare_fn


def _check_wrappable(value: Any) -> None:
    """Classify ``value`` and everything nested in it before anything mutates.

    Raises:
        UnsupportedTypeError: If any nested value has no node mapping.
    """
    stack = [value]
    while stack:
        current = stack.pop()
        kind = classify(current)
        if isinstance(current, GawkNode):
            continue
        if kind is NodeKind.RECORD:
            stack.extend(current.values())
        elif kind is NodeKind.LIST:
            stack.extend(current)


# ============================================================================
# LISTENER TRANSPLANTING
# ============================================================================


def copy_listeners(dest: GawkNode, src: GawkNode, compare_fn: CompareFn) -> None:
    """
    Copy listeners from ``src`` onto ``dest`` and onto structurally matching
    descendants.

    Record children match by key. List elements match the first unused element
    of ``src`` of the same kind for which ``compare_fn`` returns True.
    """
    if dest is src:
        return
    if src.listeners:
        logger.debug(f"Moving {len(src.listeners)} listener(s) onto {dest!r}")
    dest._transplant_listeners_from(src)

    if dest.kind is NodeKind.LIST and src.kind is NodeKind.LIST:
        used: Set[int] = set()
        for node in dest:
            for index, candidate in enumerate(src):
                if index in used or candidate.kind is not node.kind:
                    continue
                if candidate is node or compare_fn(node, candidate):
                    used.add(index)
                    copy_listeners(node, candidate, compare_fn)
                    break

    elif dest.kind is NodeKind.RECORD and src.kind is NodeKind.RECORD:
        for key, node in dest.items():
            candidate = src.child(key)
            if candidate is not None and candidate.kind is node.kind:
                copy_listeners(node, candidate, compare_fn)


# ============================================================================
# SET
# ============================================================================


def _reconcile_list(dest: GawkList, value: Any, compare_fn: CompareFn) -> None:
    old = list(dest)
    used: Set[int] = set()
    children: List[GawkNode] = []

    for item in value:
        node = wrap(item)
        for index, candidate in enumerate(old):
            if index in used or candidate.kind is not node.kind:
                continue
            if candidate is node or compare_fn(candidate, node):
                used.add(index)
                copy_listeners(node, candidate, compare_fn)
                break
        children.append(node)

    dest._replace_children(children)


def _reconcile_record(dest: GawkRecord, value: Any, compare_fn: CompareFn) -> None:
    children: Dict[Any, GawkNode] = {}

    for key, item in value.items():
        kind = classify(item)
        existing = dest.child(key)

        if existing is not None and existing.kind is kind:
            if kind.is_container:
                _reconcile(existing, item, compare_fn)
            elif existing is not item:
                existing.val = item
            children[key] = existing
        elif kind.is_container:
            fresh = wrap([] if kind is NodeKind.LIST else {})
            children[key] = _reconcile(fresh, item, compare_fn)
        else:
            children[key] = wrap(item)

    dest._replace_children(children)


def reconcile(
    dest: GawkNode, value: Any, compare_fn: Optional[CompareFn] = None
) -> GawkNode:
    """Make container ``dest`` match ``value`` of the same kind, in place.

    Nothing is mutated if ``value`` holds an unsupported value at any depth.
    """
    compare = _resolve_compare(compare_fn)

    if value is dest:
        return dest

    _check_wrappable(value)
    return _reconcile(dest, value, compare)


def _reconcile(dest: GawkNode, value: Any, compare: CompareFn) -> GawkNode:
    if value is dest:
        return dest

    if not deep_equal(dest, value):
        logger.debug(f"Reconciling {dest.kind.value} node {id(dest):#x}")
        with dest.batch():
            if dest.kind is NodeKind.LIST:
                _reconcile_list(dest, value, compare)
            else:
                _reconcile_record(dest, value, compare)

    if isinstance(value, GawkNode):
        dest._transplant_listeners_from(value)
    return dest


def _rebuild(dest: GawkNode, value: Any) -> GawkNode:
    """Build a fresh node for ``value`` carrying ``dest``'s own listeners."""
    logger.debug(
        f"Kind changed from {dest.kind.value} to {classify(value).value}, rebuilding"
    )
    plain = value.to_plain() if isinstance(value, GawkNode) else value
    fresh = wrap(plain)
    fresh._transplant_listeners_from(dest)
    fresh.notify()
    return fresh


def set_value(
    dest: Any, value: Any, compare_fn: Optional[CompareFn] = None
) -> GawkNode:
    """
    Replace the content of ``dest`` with ``value``.

    Args:
        dest: A node, or a plain list/mapping that is wrapped first.
        value: The new content (plain value or node).
        compare_fn: ``compare_fn(old_element, new_element)`` decides whether a
            new list element inherits the listeners of an old one. Defaults to
            deep equality of the two projections.

    Returns:
        ``dest`` updated in place when ``value`` has the same kind. Otherwise a
        new node holding ``value`` that carries the listeners registered on
        ``dest`` itself.

    Raises:
        InvalidCompareFunctionError: If ``compare_fn`` is not callable.
        InvalidMergeSourceError: If ``dest`` is neither a node nor a container.
    """
    compare = _resolve_compare(compare_fn)

    if isinstance(dest, GawkNode):
        node = dest
    elif isinstance(dest, (Mapping, list, tuple)):
        node = wrap(dest)
    else:
        raise InvalidMergeSourceError(
            f"Expected destination to be a node or a container, got {type(dest).__name__}"
        )

    if value is node:
        return node

    _check_wrappable(value)
    kind = classify(value)
    if kind is not node.kind:
        return _rebuild(node, value)
    if kind.is_container:
        return _reconcile(node, value, compare)

    node.val = value
    return node


# ============================================================================
# MERGE
# ============================================================================


def _mix_into(dest: GawkRecord, source: Any, deep: bool) -> None:
    for key, item in source.items():
        kind = classify(item)
        existing = dest.child(key)

        if deep and kind is NodeKind.RECORD:
            if not isinstance(existing, GawkRecord):
                dest.set(key, {})
                existing = dest.child(key)
            with existing.batch():
                _mix_into(existing, item, deep)
        elif isinstance(existing, GawkList) and kind is NodeKind.LIST:
            if not deep_equal(existing, item):
                existing.splice(0, len(existing), *item)
        else:
            dest.set(key, item)


def _mix(dest: Any, sources: Tuple[Any, ...], deep: bool) -> GawkRecord:
    if not isinstance(dest, (GawkNode, Mapping)):
        raise InvalidMergeSourceError(
            f"Expected destination to be a record, got {type(dest).__name__}"
        )
    node = wrap(dest)
    if not isinstance(node, GawkRecord):
        raise InvalidMergeSourceError(
            f"Expected destination to be a record node, got a {node.kind.value} node"
        )

    # validate everything up front so a bad source cannot leave a partial merge
    for source in sources:
        if not isinstance(source, (Mapping, GawkRecord)):
            raise InvalidMergeSourceError(
                f"Expected merge source to be a mapping or record node, got {type(source).__name__}"
            )
        _check_wrappable(source)

    if not sources:
        return node

    logger.debug(
        f"{'Deep merging' if deep else 'Merging'} {len(sources)} source(s) into {id(node):#x}"
    )
    with node.batch():
        for source in sources:
            _mix_into(node, source, deep)
    return node


def merge(dest: Any, *sources: Any) -> GawkRecord:
    """Shallow-merge one or more mappings or record nodes into ``dest``."""
    return _mix(dest, sources, deep=False)


def merge_deep(dest: Any, *sources: Any) -> GawkRecord:
    """Deep-merge one or more mappings or record nodes into ``dest``."""
    return _mix(dest, sources, deep=True)
