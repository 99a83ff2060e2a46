"""
Gawk Nodes
==========

One class per node kind. Scalars hold a single host value; containers hold
child nodes and expose the explicit mutators that notify observers.
"""

from .base import GawkNode
from .containers import GawkContainer, GawkList, GawkRecord
from .kinds import UNDEFINED, NodeKind, classify
from .scalars import (
    GawkBoolean,
    GawkDate,
    GawkFunction,
    GawkNaN,
    GawkNull,
    GawkNumber,
    GawkScalar,
    GawkString,
    GawkUndefined,
)

__all__ = [
    "GawkNode",
    "GawkScalar",
    "GawkContainer",
    # Leaf kinds
    "GawkUndefined",
    "GawkNull",
    "GawkBoolean",
    "GawkNumber",
    "GawkNaN",
    "GawkString",
    "GawkDate",
    "GawkFunction",
    # Containers
    "GawkList",
    "GawkRecord",
    # Classification
    "NodeKind",
    "UNDEFINED",
    "classify",
]
