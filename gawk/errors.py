"""
Gawk Errors - Exception Taxonomy
================================

Every error raised by gawk derives from :class:`GawkError` and from the builtin
exception that best describes it, so callers can catch either the gawk-specific
class or a generic ``TypeError``/``ValueError``.

All of these are programmer errors raised synchronously at the offending call.
None of them are retried or recovered internally.
"""


class GawkError(Exception):
    """Base error for all gawk operations."""


class UnsupportedTypeError(GawkError, TypeError):
    """Raised when a value has no node mapping."""


class NotANodeError(GawkError, TypeError):
    """Raised when an argument that must be a node is not one."""


class ParentNotANodeError(NotANodeError):
    """Raised when the parent argument is not a container node."""


class CircularReferenceError(GawkError, ValueError):
    """Raised when a parent edge would make a node its own ancestor."""


class SelfParentError(CircularReferenceError):
    """Raised when a node is passed as its own parent."""


class InvalidListenerError(GawkError, TypeError):
    """Raised when a listener is not callable."""


class InvalidFilterError(GawkError, TypeError):
    """Raised when a watch filter is not a string or a list of strings."""


class InvalidMergeSourceError(GawkError, TypeError):
    """Raised when a merge destination or source has the wrong shape."""


class InvalidCompareFunctionError(GawkError, TypeError):
    """Raised when a reconciliation compare function is not callable."""


class IncompatibleValueError(GawkError, TypeError):
    """Raised when a value cannot be stored in a node of a given kind."""


class ReadOnlyViolationError(GawkError, AttributeError):
    """Raised on an attempt to overwrite or delete graph metadata."""


class NotificationLoopError(GawkError, RuntimeError):
    """Raised when listeners keep re-notifying the node they listen to."""


class ConfigError(GawkError, ValueError):
    """Invalid configuration value."""
