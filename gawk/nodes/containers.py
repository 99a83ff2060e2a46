"""
Gawk Container Nodes - Lists and Records
========================================

Containers hold child *nodes*, never raw host values: every value stored in a
container is wrapped first, with the container registered as its parent.

The methods below are the only way to change a container. Each one:

1. wraps incoming values with this container as parent
2. performs the change on the child storage
3. drops this container from the parents of every child it no longer holds
4. invalidates cached hashes and notifies, once per call

Writing a plain value over an existing child of the same kind updates that
child in place, so listeners registered on it keep working.

Example:
    ```python
    from gawk import wrap

    doc = wrap({"user": {"name": "ada"}, "tags": []})
    doc.watch(lambda node, source: print("changed:", source))

    doc["user"].set("name", "grace")   # changed: GawkString('grace')
    doc["tags"].push("a", "b")         # one notification for both items
    ```
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..errors import IncompatibleValueError
from ..util import hashing
from .base import GawkNode
from .kinds import NodeKind, classify


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class GawkContainer(GawkNode):
    """Shared plumbing for list and record nodes."""

    def _iter_children(self) -> Iterable[GawkNode]:
        raise NotImplementedError

    def child(self, key: Any) -> Optional[GawkNode]:
        """Return the child stored under ``key``, or None."""
        raise NotImplementedError

    def _adopt(self, value: Any) -> GawkNode:
        from ..factory import wrap

        return wrap(value, self)

    def _adopt_all(self, values: Iterable[Any]) -> List[GawkNode]:
        """Wrap several values, validating every parent edge before adding any."""
        from ..factory import wrap

        nodes = [wrap(value) for value in values]
        self._link(nodes)
        return nodes

    def _link(self, nodes: Iterable[GawkNode]) -> None:
        nodes = list(nodes)
        for node in nodes:
            node._validate_parent(self)
        for node in nodes:
            node._add_parent(self)

    def _release(self, node: GawkNode) -> None:
        if not any(child is node for child in self._iter_children()):
            node._remove_parent(self)

    def _changed(self) -> None:
        self._touch()
        self.notify()

    def _put(
        self,
        existing: Optional[GawkNode],
        value: Any,
        assign: Callable[[GawkNode], None],
    ) -> None:
        """Store ``value`` over ``existing`` through ``assign``."""
        if isinstance(value, GawkNode):
            if value is existing:
                return
            value._add_parent(self)
            assign(value)
        elif existing is not None and existing.kind is classify(value):
            if existing.kind.is_container:
                from ..reconcile import reconcile

                reconcile(existing, value)
            else:
                existing.val = value
            return
        else:
            assign(self._adopt(value))

        if existing is not None:
            self._release(existing)
        self._changed()

    def _get_val(self) -> Any:
        return self.to_plain()

    def _set_val(self, value: Any) -> None:
        from ..reconcile import reconcile

        if classify(value) is not self._kind:
            raise IncompatibleValueError(
                f"Cannot assign a {classify(value).value} value to a {self._kind.value} node"
            )
        reconcile(self, value)


class GawkRecord(GawkContainer):
    """A mapping of keys to child nodes."""

    _kind = NodeKind.RECORD

    def __init__(self, value: Any = None, parent: Optional[GawkNode] = None) -> None:
        super().__init__(parent)
        self._raw: Dict[Any, GawkNode] = {}

        source = value
        if value is None:
            value = {}
        elif isinstance(value, GawkNode):
            if value.kind is not NodeKind.RECORD:
                raise IncompatibleValueError(
                    f"Cannot build a record node from a {value.kind.value} node"
                )
            value = value.to_plain()
        elif not isinstance(value, Mapping):
            raise IncompatibleValueError(
                f"Expected a mapping, got {type(value).__name__}"
            )

        for key, item in value.items():
            self._raw[key] = self._adopt(item)

        if isinstance(source, GawkRecord):
            self._transplant_listeners_from(source)

    def _iter_children(self) -> Iterable[GawkNode]:
        return self._raw.values()

    def child(self, key: Any) -> Optional[GawkNode]:
        try:
            return self._raw.get(key)
        except TypeError:
            return None

    # Reading

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the child node for ``key``, or ``default``.

        A list or tuple key is treated as a path: ``get(["a", "b"])`` is
        ``get("a").get("b")``.
        """
        if isinstance(key, (list, tuple)):
            current: Optional[GawkNode] = self
            for step in key:
                if current is None or not current.kind.is_container:
                    return default
                current = current.child(step)
            return default if current is None else current

        node = self.child(key)
        return default if node is None else node

    def has(self, key: Any) -> bool:
        return self.child(key) is not None

    def keys(self) -> List[Any]:
        return list(self._raw)

    def values(self) -> List[GawkNode]:
        return list(self._raw.values())

    def items(self) -> List[Tuple[Any, GawkNode]]:
        return list(self._raw.items())

    # Writing

    def set(self, key: Any, value: Any) -> "GawkRecord":
        """Store ``value`` under ``key``."""

        def assign(node: GawkNode) -> None:
            self._raw[key] = node

        self._put(self._raw.get(key), value, assign)
        return self

    def delete(self, key: Any) -> Optional[GawkNode]:
        """Remove ``key``. Returns the removed node, or None if it was absent."""
        if key not in self._raw:
            return None
        node = self._raw.pop(key)
        self._release(node)
        self._changed()
        return node

    def clear(self) -> "GawkRecord":
        """Remove every key with a single notification."""
        if not self._raw:
            return self
        removed = list(self._raw.values())
        self._raw = {}
        for node in removed:
            node._remove_parent(self)
        self._changed()
        return self

    def _replace_children(self, children: Dict[Any, GawkNode]) -> None:
        """Swap in a complete key -> node mapping (used by reconciliation)."""
        old = self._raw
        if list(old) == list(children) and all(
            old[key] is node for key, node in children.items()
        ):
            return

        self._link(children.values())
        self._raw = dict(children)
        for node in old.values():
            self._release(node)
        self._changed()

    # Projection

    def _compute_hash(self) -> bytes:
        return hashing.record_hash(
            (key, node.content_hash) for key, node in self._raw.items()
        )

    def to_plain(self) -> Dict[Any, Any]:
        return {key: node.to_plain() for key, node in self._raw.items()}

    # Mapping protocol

    def __len__(self) -> int:
        return len(self._raw)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._raw))

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __getitem__(self, key: Any) -> GawkNode:
        return self._raw[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        if self.delete(key) is None:
            raise KeyError(key)


class GawkList(GawkContainer):
    """An ordered sequence of child nodes."""

    _kind = NodeKind.LIST

    def __init__(self, value: Any = None, parent: Optional[GawkNode] = None) -> None:
        super().__init__(parent)
        self._raw: List[GawkNode] = []

        source = value
        if value is None:
            value = []
        elif isinstance(value, GawkNode):
            if value.kind is not NodeKind.LIST:
                raise IncompatibleValueError(
                    f"Cannot build a list node from a {value.kind.value} node"
                )
            value = value.to_plain()
        elif not isinstance(value, (list, tuple)):
            raise IncompatibleValueError(
                f"Expected a list or tuple, got {type(value).__name__}"
            )

        self._raw = [self._adopt(item) for item in value]

        if isinstance(source, GawkList):
            self._transplant_listeners_from(source)

    def _iter_children(self) -> Iterable[GawkNode]:
        return self._raw

    def child(self, key: Any) -> Optional[GawkNode]:
        if isinstance(key, str):
            if not (key.isascii() and key.isdigit()):
                return None
            index = int(key)
        elif isinstance(key, int) and not isinstance(key, bool):
            index = key
        else:
            return None
        if 0 <= index < len(self._raw):
            return self._raw[index]
        return None

    @property
    def length(self) -> int:
        return len(self._raw)

    def _normalize_index(self, index: int) -> int:
        if index < 0:
            index += len(self._raw)
        return index

    # Reading

    def get(self, index: int, default: Any = None) -> Any:
        """Return the node at ``index`` (negative counts from the end), or ``default``."""
        index = self._normalize_index(index)
        if 0 <= index < len(self._raw):
            return self._raw[index]
        return default

    # Writing

    def set(self, index: int, value: Any) -> "GawkList":
        """Store ``value`` at ``index``. ``index == length`` appends."""
        index = self._normalize_index(index)
        if index == len(self._raw):
            self.push(value)
            return self
        if not 0 <= index < len(self._raw):
            raise IndexError(f"list index {index} out of range")

        def assign(node: GawkNode) -> None:
            self._raw[index] = node

        self._put(self._raw[index], value, assign)
        return self

    def delete(self, index: int) -> Optional[GawkNode]:
        """Remove the element at ``index``. Returns it, or None if out of range."""
        index = self._normalize_index(index)
        if not 0 <= index < len(self._raw):
            return None
        return self.splice(index, 1)[0]

    def push(self, *items: Any) -> int:
        """Append items; returns the new length."""
        self.splice(len(self._raw), 0, *items)
        return len(self._raw)

    def pop(self) -> Optional[GawkNode]:
        """Remove and return the last element, or None when empty."""
        if not self._raw:
            return None
        return self.splice(len(self._raw) - 1, 1)[0]

    def unshift(self, *items: Any) -> int:
        """Prepend items; returns the new length."""
        self.splice(0, 0, *items)
        return len(self._raw)

    def shift(self) -> Optional[GawkNode]:
        """Remove and return the first element, or None when empty."""
        if not self._raw:
            return None
        return self.splice(0, 1)[0]

    def splice(
        self, start: Optional[int] = None, delete_count: Optional[int] = None, *items: Any
    ) -> List[GawkNode]:
        """
        Remove ``delete_count`` elements at ``start`` and insert ``items`` there.

        ``start`` is clamped to ``[0, length]``. Omitting ``delete_count``
        removes everything from ``start`` to the end. Observers see a single
        notification however many elements change.

        Returns:
            The removed nodes.
        """
        if start is None:
            return []

        length = len(self._raw)
        start = _clamp(start, 0, length)
        if delete_count is None:
            delete_count = length - start
        delete_count = _clamp(delete_count, 0, length - start)
        if not delete_count and not items:
            return []

        with self.batch():
            inserted = self._adopt_all(items)
            removed = self._raw[start : start + delete_count]
            self._raw[start : start + delete_count] = inserted
            for node in removed:
                self._release(node)
            self._changed()
        return removed

    def fill(self, value: Any, start: int = 0, end: Optional[int] = None) -> "GawkList":
        """Overwrite ``[start, end)`` with ``value`` under one notification.

        Plain values are wrapped separately for every slot; a node value is
        shared by all of them.
        """
        length = len(self._raw)
        start = _clamp(start, 0, length)
        end = length if end is None else _clamp(end, 0, length)
        if start >= end:
            return self

        with self.batch():
            for index in range(start, end):
                (node,) = self._adopt_all([value])
                old = self._raw[index]
                self._raw[index] = node
                self._release(old)
            self._changed()
        return self

    def _replace_children(self, children: List[GawkNode]) -> None:
        """Swap in a complete element list (used by reconciliation)."""
        old = self._raw
        if len(old) == len(children) and all(a is b for a, b in zip(old, children)):
            return
        self.splice(0, len(old), *children)

    # Projection

    def _compute_hash(self) -> bytes:
        return hashing.list_hash(node.content_hash for node in self._raw)

    def to_plain(self) -> List[Any]:
        return [node.to_plain() for node in self._raw]

    def to_string(self) -> str:
        return ",".join(node.to_string() for node in self._raw)

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._raw)

    def __iter__(self) -> Iterator[GawkNode]:
        return iter(list(self._raw))

    def __getitem__(self, index: Union[int, slice]) -> Any:
        return self._raw[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        if self.delete(index) is None:
            raise IndexError("list index out of range")
