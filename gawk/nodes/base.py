"""
Gawk GawkNode - Base Class for All Nodes
========================================

This module provides the GawkNode base class that carries the graph state shared
by every node kind:

- parent links (non-owning weak references to the containers holding the node)
- listeners, each with an optional key-path filter
- last-seen content hashes for filtered listeners
- a pause depth and pending queue for batching notifications
- a lazily computed content hash

Notification protocol
---------------------
``notify(source)`` runs the node's listeners in registration order and then
forwards the same ``source`` to every parent, depth-first. While a node is
paused, the ``source`` of each incoming notification is queued instead. The
outermost ``resume()`` then notifies once, passing the queued source when
there was exactly one and the paused node itself otherwise.

Parent links never form a cycle: adding one that would is rejected with
SelfParentError / CircularReferenceError, so propagation always terminates.
A listener that mutates the node it is running on does not recurse; the extra
notification is deferred until the current round finishes.
"""

import logging
import weakref
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..config import get_config
from ..errors import (
    CircularReferenceError,
    InvalidListenerError,
    NotificationLoopError,
    ParentNotANodeError,
    ReadOnlyViolationError,
    SelfParentError,
)
from ..util import hashing
from ..util.ancestry import would_create_cycle
from ..util.paths import Path, normalize_filter, resolve_path
from .kinds import NodeKind

logger = logging.getLogger(__name__)

Listener = Callable[[Any, "GawkNode"], Any]


def _read_only(getter: Callable[[Any], Any]) -> property:
    """Property whose setter and deleter raise ReadOnlyViolationError."""

    def _reject(self: Any, *args: Any) -> None:
        raise ReadOnlyViolationError(
            f"Cannot override or delete property {getter.__name__!r}"
        )

    return property(getter, _reject, _reject, getter.__doc__)


class GawkNode:
    """
    Observable wrapper around one value.

    Subclasses set ``_kind`` and implement ``_get_val``, ``_set_val``,
    ``_compute_hash`` and ``to_plain``.
    """

    _kind: NodeKind

    def __init__(self, parent: Optional["GawkNode"] = None) -> None:
        self._parents: Dict[int, "weakref.ref[GawkNode]"] = {}
        self._listeners: Dict[Listener, Optional[Path]] = {}
        self._previous: Dict[Listener, bytes] = {}
        self._queue: Optional[Dict["GawkNode", None]] = None
        self._pause_depth = 0
        self._notifying = False
        self._deferred: Optional["GawkNode"] = None
        self._hash: Optional[bytes] = None
        if parent is not None:
            self._add_parent(parent)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @_read_only
    def kind(self) -> NodeKind:
        """The node's kind. Never changes."""
        return self._kind

    @_read_only
    def parents(self) -> Tuple["GawkNode", ...]:
        """The live containers that hold this node."""
        live = []
        for ref in list(self._parents.values()):
            parent = ref()
            if parent is not None:
                live.append(parent)
        return tuple(live)

    @_read_only
    def listeners(self) -> Tuple[Tuple[Listener, Optional[Path]], ...]:
        """Registered ``(callback, filter)`` pairs in registration order."""
        return tuple(self._listeners.items())

    @property
    def val(self) -> Any:
        """The node's value. Containers return their plain projection."""
        return self._get_val()

    @val.setter
    def val(self, value: Any) -> None:
        self._set_val(value)

    @property
    def content_hash(self) -> bytes:
        """Deterministic hash of the node's content, cached until it changes."""
        if self._hash is None:
            self._hash = self._compute_hash()
        return self._hash

    @property
    def is_paused(self) -> bool:
        return self._queue is not None

    def _get_val(self) -> Any:
        raise NotImplementedError

    def _set_val(self, value: Any) -> None:
        raise NotImplementedError

    def _compute_hash(self) -> bytes:
        raise NotImplementedError

    def to_plain(self) -> Any:
        """Return the listener-free host value this node represents."""
        raise NotImplementedError

    def to_json(self, pretty: bool = False) -> Optional[str]:
        """Serialize the plain projection; None when it has no JSON form."""
        from ..projection import to_json_string

        return to_json_string(self, pretty)

    def to_string(self) -> str:
        return str(self.to_plain())

    # ------------------------------------------------------------------
    # Parent links
    # ------------------------------------------------------------------

    def _validate_parent(self, parent: Any) -> None:
        if parent is self:
            raise SelfParentError("The parent must not be the same node as the value")
        if not isinstance(parent, GawkNode) or not parent.kind.is_container:
            raise ParentNotANodeError(
                f"Expected parent to be a list or record node, got {type(parent).__name__}"
            )
        if would_create_cycle(self, parent):
            raise CircularReferenceError(
                f"Adding {parent!r} as a parent of {self!r} would make it its own ancestor"
            )

    def _add_parent(self, parent: "GawkNode") -> None:
        if id(parent) in self._parents and self._parents[id(parent)]() is parent:
            return
        self._validate_parent(parent)
        self._parents[id(parent)] = weakref.ref(parent)

    def _remove_parent(self, parent: "GawkNode") -> None:
        ref = self._parents.get(id(parent))
        if ref is None:
            return
        current = ref()
        if current is None or current is parent:
            del self._parents[id(parent)]

    def _touch(self) -> None:
        """Drop the cached hash of this node and of every ancestor."""
        self._hash = None
        stack: List[GawkNode] = list(self.parents)
        while stack:
            node = stack.pop()
            # an uncached ancestor has uncached ancestors too
            if node._hash is None:
                continue
            node._hash = None
            stack.extend(node.parents)

    # ------------------------------------------------------------------
    # Batching
    # ------------------------------------------------------------------

    def pause(self) -> bool:
        """Defer notifications until the matching resume().

        Returns:
            True if the node was already paused.
        """
        was_paused = self._queue is not None
        if not was_paused:
            self._queue = {}
        self._pause_depth += 1
        return was_paused

    def resume(self) -> None:
        """Close one pause() and flush queued notifications at the outermost one."""
        if self._pause_depth == 0:
            return
        self._pause_depth -= 1
        if self._pause_depth:
            return

        queue, self._queue = self._queue, None
        if not queue:
            return

        sources = list(queue)
        source = sources[0] if len(sources) == 1 else self
        logger.debug(
            f"Flushing {len(sources)} queued change(s) on {type(self).__name__} {id(self):#x}"
        )
        self.notify(source)

    @contextmanager
    def batch(self) -> Iterator["GawkNode"]:
        """Context manager pairing pause() and resume()."""
        self.pause()
        try:
            yield self
        finally:
            self.resume()

    # ------------------------------------------------------------------
    # Notification
    # ------------------------------------------------------------------

    def notify(self, source: Optional["GawkNode"] = None) -> None:
        """Dispatch a change notification to listeners, then to parents.

        Args:
            source: The node where the change originated. Defaults to self and
                is passed unchanged up the parent chain.
        """
        if source is None:
            source = self

        if self._queue is not None:
            self._queue[source] = None
            return

        if self._notifying:
            if self._deferred is None:
                self._deferred = source
            elif self._deferred is not source:
                self._deferred = self
            return

        self._notifying = True
        try:
            rounds = 1
            while True:
                self._dispatch(source)
                for parent in self.parents:
                    parent.notify(source)

                if self._deferred is None:
                    break
                if rounds >= get_config().max_notify_rounds:
                    raise NotificationLoopError(
                        f"Listeners re-notified {type(self).__name__} {id(self):#x} "
                        f"more than {rounds} times in a row"
                    )
                rounds += 1
                source, self._deferred = self._deferred, None
        finally:
            self._notifying = False
            self._deferred = None

    def _dispatch(self, source: "GawkNode") -> None:
        # listeners removed mid-loop still run in this round
        for callback, path in list(self._listeners.items()):
            if path is None:
                callback(self, source)
                continue

            target = resolve_path(self, path)
            digest = target.content_hash if target is not None else hashing.missing_hash()
            if self._previous.get(callback) != digest:
                callback(target, source)
            if callback in self._listeners:
                self._previous[callback] = digest

    def watch(self, filter: Any, callback: Optional[Listener] = None) -> "GawkNode":
        """Register a listener, optionally scoped to a key path.

        ``node.watch(callback)`` fires on any change in this node or below.
        ``node.watch("key", callback)`` / ``node.watch(["a", "b"], callback)``
        fires only when the value at that path changes; the callback receives
        the resolved node, or None once the path no longer resolves.

        Returns:
            This node, for chaining.
        """
        if callback is None and callable(filter):
            filter, callback = None, filter

        path = normalize_filter(filter)
        if not callable(callback):
            raise InvalidListenerError("Expected listener to be a function")

        self._listeners[callback] = path
        if path is None:
            self._previous.pop(callback, None)
        else:
            target = resolve_path(self, path)
            self._previous[callback] = (
                target.content_hash if target is not None else hashing.missing_hash()
            )
        return self

    def unwatch(self, callback: Optional[Listener] = None) -> "GawkNode":
        """Remove one listener, or every listener when called without one."""
        if callback is None:
            self._listeners.clear()
            self._previous.clear()
            return self

        if not callable(callback):
            raise InvalidListenerError("Expected listener to be a function")

        self._listeners.pop(callback, None)
        self._previous.pop(callback, None)
        return self

    def _transplant_listeners_from(self, other: "GawkNode") -> None:
        """Copy another node's listeners (and last-seen hashes) onto this one."""
        for callback, path in other._listeners.items():
            self._listeners[callback] = path
            if callback in other._previous:
                self._previous[callback] = other._previous[callback]

    # ------------------------------------------------------------------
    # Magic methods
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        from ..util.equality import deep_equal

        return deep_equal(self, other)

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_plain()!r})"
