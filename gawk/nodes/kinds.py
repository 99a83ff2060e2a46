"""
Gawk Node Kinds - Value Classification
======================================

This module defines the closed set of node kinds and the single function that
decides which kind a host value maps to.

Classification order (first match wins):

1. an existing node            -> that node's kind
2. ``UNDEFINED``               -> UNDEFINED
3. ``None``                    -> NULL
4. ``bool``                    -> BOOLEAN
5. real numbers                -> NAN when ``value != value``, else NUMBER
6. ``str``                     -> STRING
7. ``list`` / ``tuple``        -> LIST
8. ``datetime.date``           -> DATE
9. other callables             -> FUNCTION
10. mappings                   -> RECORD

Anything else raises UnsupportedTypeError.
"""

import datetime
import numbers
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..errors import UnsupportedTypeError


class _Undefined:
    """Sentinel for "no value at all", distinct from ``None``."""

    _instance = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


class NodeKind(Enum):
    """The closed category a node belongs to."""

    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    NAN = "nan"
    STRING = "string"
    DATE = "date"
    FUNCTION = "function"
    LIST = "list"
    RECORD = "record"

    @property
    def is_container(self) -> bool:
        return self is NodeKind.LIST or self is NodeKind.RECORD


def classify(value: Any) -> NodeKind:
    """Return the kind a value maps to.

    Raises:
        UnsupportedTypeError: If the value has no node mapping.
    """
    from .base import GawkNode

    if isinstance(value, GawkNode):
        return value.kind
    if value is UNDEFINED:
        return NodeKind.UNDEFINED
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, numbers.Real):
        return NodeKind.NAN if value != value else NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, (list, tuple)):
        return NodeKind.LIST
    if isinstance(value, datetime.date):
        return NodeKind.DATE
    if callable(value):
        return NodeKind.FUNCTION
    if isinstance(value, Mapping):
        return NodeKind.RECORD
    raise UnsupportedTypeError(
        f"Cannot wrap value of type {type(value).__name__!r}: no node mapping"
    )
