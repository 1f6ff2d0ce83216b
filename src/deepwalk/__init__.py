"""Deep, reflection-driven object graph walker.

Walks any value reachable from a root and reports every node to a callback,
with role flags, optional address information and repeat-visit detection.
Building block for deep copiers, differs, sanitizers and structural validators.
"""

from deepwalk.addressing import check_representation, raw_address
from deepwalk.errors import (
    InternalRepresentationError,
    InvalidValueError,
    Signal,
    SkipSubtree,
    UnknownKindError,
    ValueNotSettableError,
    WalkError,
)
from deepwalk.info import WalkInfo
from deepwalk.kinds import Kind, kind_of, register_kind, registered_kinds, unregister_kind
from deepwalk.options import WalkOptions
from deepwalk.reflection import Access, Slot, Value
from deepwalk.sizes import header_size
from deepwalk.visited import VisitedTable
from deepwalk.walker import WalkFunc, Walker, walk

CONTINUE = Signal.CONTINUE
SKIP = Signal.SKIP

__all__ = [
    "Walker",
    "WalkFunc",
    "WalkInfo",
    "WalkOptions",
    "walk",
    # Signals
    "Signal",
    "CONTINUE",
    "SKIP",
    "SkipSubtree",
    # Errors
    "WalkError",
    "UnknownKindError",
    "InvalidValueError",
    "InternalRepresentationError",
    "ValueNotSettableError",
    # Reflection
    "Access",
    "Kind",
    "Slot",
    "Value",
    "kind_of",
    "register_kind",
    "registered_kinds",
    "unregister_kind",
    # Addressing and diagnostics
    "VisitedTable",
    "check_representation",
    "header_size",
    "raw_address",
]
