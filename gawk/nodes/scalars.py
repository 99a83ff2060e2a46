"""
Gawk Scalar Nodes - Leaf Node Kinds
===================================

Leaf nodes hold a single host value and never have children. Writing ``val``
casts the new value to the node's kind, so a node's kind never changes:

- Undefined, Null and NaN accept writes and ignore them (no notification)
- Boolean, Number and String cast the incoming value
- Date and Function only accept values of their own kind

A notification fires only when the stored value actually changes.
"""

import datetime
import logging
import numbers
from typing import Any, Callable, Optional

from ..errors import IncompatibleValueError
from ..util import hashing
from .base import GawkNode
from .kinds import UNDEFINED, NodeKind

logger = logging.getLogger(__name__)

_NO_VALUE = object()


def _plain_of(value: Any) -> Any:
    if isinstance(value, GawkNode):
        return value.to_plain()
    return value


class GawkScalar(GawkNode):
    """Base class for leaf nodes."""

    def __init__(self, value: Any = _NO_VALUE, parent: Optional[GawkNode] = None) -> None:
        super().__init__(parent)
        if value is _NO_VALUE:
            value = self._default()
        self._value = self._coerce(value)
        if isinstance(value, type(self)):
            self._transplant_listeners_from(value)

    def _default(self) -> Any:
        return UNDEFINED

    def _coerce(self, value: Any) -> Any:
        raise NotImplementedError

    def _same(self, value: Any) -> bool:
        return value == self._value

    def _get_val(self) -> Any:
        return self._value

    def _set_val(self, value: Any) -> None:
        new_value = self._coerce(value)
        if self._same(new_value):
            return
        self._value = new_value
        self._touch()
        self.notify()

    def _compute_hash(self) -> bytes:
        return hashing.scalar_hash(self._kind, self._value)

    def to_plain(self) -> Any:
        return self._value

    def __bool__(self) -> bool:
        return bool(self._value)


class _FixedScalar(GawkScalar):
    """A leaf whose value can never change."""

    def _set_val(self, value: Any) -> None:
        logger.debug(f"Ignoring write to immutable {self._kind.value} node")

    def to_string(self) -> str:
        return ""


class GawkUndefined(_FixedScalar):
    _kind = NodeKind.UNDEFINED

    def _coerce(self, value: Any) -> Any:
        return UNDEFINED


class GawkNull(_FixedScalar):
    _kind = NodeKind.NULL

    def _coerce(self, value: Any) -> Any:
        return None


class GawkNaN(_FixedScalar):
    """Not-a-number. Kept apart from Number because NaN never equals itself."""

    _kind = NodeKind.NAN

    def _coerce(self, value: Any) -> Any:
        return float("nan")

    def _same(self, value: Any) -> bool:
        return True

    def to_string(self) -> str:
        return "NaN"


class GawkBoolean(GawkScalar):
    _kind = NodeKind.BOOLEAN

    def _default(self) -> Any:
        return False

    def _coerce(self, value: Any) -> Any:
        return bool(_plain_of(value))


class GawkNumber(GawkScalar):
    """
    A finite or infinite real number.

    Casting rules: ``None``/``UNDEFINED`` become 0, booleans become 0/1 and
    numeric strings are parsed. Anything else, including NaN, is rejected
    because it would need a different node kind.
    """

    _kind = NodeKind.NUMBER

    def _default(self) -> Any:
        return 0

    def _coerce(self, value: Any) -> Any:
        value = _plain_of(value)
        if value is None or value is UNDEFINED:
            return 0
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, numbers.Real):
            result = value
        elif isinstance(value, str):
            result = self._parse(value)
        else:
            raise IncompatibleValueError(
                f"Cannot store {type(value).__name__} in a number node"
            )

        if result != result:
            raise IncompatibleValueError("Cannot store NaN in a number node")
        return result

    @staticmethod
    def _parse(text: str) -> Any:
        text = text.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise IncompatibleValueError(f"Cannot parse {text!r} as a number") from None


class GawkString(GawkScalar):
    _kind = NodeKind.STRING

    def _default(self) -> Any:
        return ""

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, GawkNode):
            return value.to_string()
        if value is None or value is UNDEFINED:
            return ""
        if isinstance(value, str):
            return value
        return str(value)

    def to_string(self) -> str:
        return self._value


class GawkDate(GawkScalar):
    _kind = NodeKind.DATE

    def _default(self) -> Any:
        return datetime.datetime.now()

    def _coerce(self, value: Any) -> Any:
        value = _plain_of(value)
        if not isinstance(value, datetime.date):
            raise IncompatibleValueError(
                f"Expected a date, got {type(value).__name__}"
            )
        return value

    def _same(self, value: Any) -> bool:
        return type(value) is type(self._value) and value == self._value

    def to_string(self) -> str:
        return self._value.isoformat()


class GawkFunction(GawkScalar):
    """A callable leaf. ``exec()`` invokes it."""

    _kind = NodeKind.FUNCTION

    def _default(self) -> Any:
        raise IncompatibleValueError("A function node needs a callable value")

    def _coerce(self, value: Any) -> Any:
        value = _plain_of(value)
        if not callable(value):
            raise IncompatibleValueError(
                f"Expected a callable, got {type(value).__name__}"
            )
        return value

    def _same(self, value: Any) -> bool:
        return value is self._value

    def exec(self, *args: Any, **kwargs: Any) -> Any:
        """Call the wrapped function and return its result."""
        func: Callable[..., Any] = self._value
        return func(*args, **kwargs)
