"""
Gawk Paths - Watch Filters and Path Resolution
==============================================

A watch filter is a key path: either a single key (``"foo"``) or a list of keys
(``["foo", "bar"]``). Record steps look up the key; list steps accept a
decimal index string (``"0"``). Any other step fails to resolve.
"""

from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple

from ..errors import InvalidFilterError

if TYPE_CHECKING:
    from ..nodes.base import GawkNode

Path = Tuple[str, ...]


def normalize_filter(filter: Any) -> Optional[Path]:
    """Turn a user-supplied filter into a tuple of keys, or None for no filter."""
    if filter is None:
        return None
    if isinstance(filter, str):
        return (filter,)
    if isinstance(filter, (list, tuple)) and all(isinstance(key, str) for key in filter):
        return tuple(filter)
    raise InvalidFilterError(
        f"Expected filter to be a string or list of strings, got {filter!r}"
    )


def resolve_path(node: "GawkNode", path: Sequence[str]) -> Optional["GawkNode"]:
    """Walk ``path`` down from ``node``.

    Returns:
        The node the path points at, or None if any step does not resolve.
    """
    current = node
    for key in path:
        if not current.kind.is_container:
            return None
        current = current.child(key)
        if current is None:
            return None
    return current
