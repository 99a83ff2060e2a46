"""
Gawk Configuration
==================

GawkConfig is the process-wide configuration object, frozen after creation.
Use :func:`configure` to swap in a modified copy and :func:`reset_config` to
restore the defaults (the test-suite does this before every test).
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GawkConfig:
    """Configuration for the gawk runtime.

    Attributes:
        max_notify_rounds: How many dispatch rounds a single node may run when
            its own listeners keep mutating it. Exceeding it raises
            NotificationLoopError.
        json_indent: Indentation used by ``to_json_string(pretty=True)``.
        hash_digest_size: blake2b digest size, in bytes, for content hashes.
    """

    max_notify_rounds: int = 100
    json_indent: int = 2
    hash_digest_size: int = 16

    def __post_init__(self) -> None:
        if not isinstance(self.max_notify_rounds, int) or self.max_notify_rounds < 1:
            raise ConfigError(
                f"max_notify_rounds must be a positive integer, got {self.max_notify_rounds!r}"
            )
        if not isinstance(self.json_indent, int) or self.json_indent < 0:
            raise ConfigError(
                f"json_indent must be a non-negative integer, got {self.json_indent!r}"
            )
        if not isinstance(self.hash_digest_size, int) or not (
            1 <= self.hash_digest_size <= 64
        ):
            raise ConfigError(
                f"hash_digest_size must be between 1 and 64, got {self.hash_digest_size!r}"
            )


_current = GawkConfig()


def get_config() -> GawkConfig:
    """Return the active configuration."""
    return _current


def configure(**overrides: Any) -> GawkConfig:
    """Replace selected configuration fields and return the new configuration."""
    global _current
    known = {f.name for f in dataclasses.fields(GawkConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")
    _current = dataclasses.replace(_current, **overrides)
    logger.debug(f"Configuration updated: {_current}")
    return _current


def reset_config() -> None:
    """Restore the default configuration."""
    global _current
    _current = GawkConfig()
