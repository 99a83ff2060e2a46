"""
Gawk Hashing - Deterministic Content Hashes
===========================================

Content hashes back two features:

- the node hash hierarchy (a container's hash is a fold of its children's
  hashes, cached until the container or a descendant mutates)
- filtered watches, which compare the hash of the sub-value a path resolves to
  before and after a change

Hashes are blake2b digests sized by ``GawkConfig.hash_digest_size``. A value
that a path does not resolve to at all hashes to :func:`missing_hash`, which is
distinct from the hash of an Undefined node.
"""

import datetime
import hashlib
from typing import Any, Iterable, Tuple

from ..config import get_config
from ..nodes.kinds import NodeKind


def _new_hasher() -> Any:
    return hashlib.blake2b(digest_size=get_config().hash_digest_size)


def _framed(data: bytes) -> bytes:
    return len(data).to_bytes(8, "big") + data


def _canonical_number(value: Any) -> str:
    # 1 and 1.0 are the same number and must hash the same
    if isinstance(value, float) and value.is_integer():
        return repr(int(value))
    return repr(value)


def missing_hash() -> bytes:
    """Hash of a path that does not resolve."""
    hasher = _new_hasher()
    hasher.update(b"\x00<missing>")
    return hasher.digest()


def scalar_hash(kind: NodeKind, value: Any) -> bytes:
    """Hash a leaf value of the given kind."""
    if kind is NodeKind.BOOLEAN:
        payload = b"1" if value else b"0"
    elif kind is NodeKind.NUMBER:
        payload = _canonical_number(value).encode("ascii")
    elif kind is NodeKind.STRING:
        payload = value.encode("utf-8", "surrogatepass")
    elif kind is NodeKind.DATE:
        payload = value.isoformat().encode("ascii")
        if isinstance(value, datetime.datetime):
            payload = b"T" + payload
    elif kind is NodeKind.FUNCTION:
        name = getattr(value, "__qualname__", type(value).__name__)
        payload = f"{getattr(value, '__module__', '')}.{name}:{id(value)}".encode(
            "utf-8", "surrogatepass"
        )
    else:
        payload = b""

    hasher = _new_hasher()
    hasher.update(_framed(kind.value.encode("ascii")))
    hasher.update(_framed(payload))
    return hasher.digest()


def list_hash(child_hashes: Iterable[bytes]) -> bytes:
    """Order-sensitive fold of element hashes."""
    hasher = _new_hasher()
    hasher.update(_framed(NodeKind.LIST.value.encode("ascii")))
    for child in child_hashes:
        hasher.update(_framed(child))
    return hasher.digest()


def record_hash(entries: Iterable[Tuple[Any, bytes]]) -> bytes:
    """Key-order-sensitive fold of ``(key, child_hash)`` pairs."""
    hasher = _new_hasher()
    hasher.update(_framed(NodeKind.RECORD.value.encode("ascii")))
    for key, child in entries:
        hasher.update(_framed(repr(key).encode("utf-8", "surrogatepass")))
        hasher.update(_framed(child))
    return hasher.digest()
