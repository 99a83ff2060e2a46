"""
Gawk Utils - Helpers Shared by the Node Classes
===============================================

- ancestry: parent-cycle detection
- equality: structural deep equality (default reconciliation compare)
- hashing: deterministic content hashes
- paths: watch filter normalisation and path resolution
"""

from .ancestry import iter_ancestors, would_create_cycle
from .equality import deep_equal
from .paths import Path, normalize_filter, resolve_path

__all__ = [
    "iter_ancestors",
    "would_create_cycle",
    "deep_equal",
    "Path",
    "normalize_filter",
    "resolve_path",
]
