"""Errors and control signals raised during a walk.

Engine errors derive from WalkError and from the builtin category they belong
to, so callers can match either ``except UnknownKindError`` or
``except TypeError``. Exceptions raised by a walk callback are never wrapped:
they reach the caller of ``walk()`` unchanged.
"""

from __future__ import annotations

from enum import Enum


class Signal(Enum):
    """Values a walk callback may return.

    CONTINUE: Descend into the node's children (same as returning None).
    SKIP:     Do not descend into this node; siblings are still visited.
    """

    CONTINUE = "continue"
    SKIP = "skip"


class SkipSubtree(Exception):
    """Raised from a callback to skip the current node's children.

    Equivalent to returning ``Signal.SKIP``. Caught by the node that raised it;
    never reaches the caller of ``walk()``.
    """


class WalkError(Exception):
    """Base class for errors raised by the walk engine itself."""


class UnknownKindError(WalkError, TypeError):
    """Raised when a value's runtime kind has no traversal route.

    Usually means the type needs an entry in the kind table
    (see ``deepwalk.register_kind``).
    """

    def __init__(self, value_type: type, path: str = "$"):
        self.value_type = value_type
        self.path = path
        super().__init__(
            f"can't walk into {value_type.__module__}.{value_type.__qualname__} at {path}"
        )


class InvalidValueError(WalkError, ValueError):
    """Raised when the walk reaches an empty value handle."""

    def __init__(self, path: str = "$"):
        self.path = path
        super().__init__(f"invalid value at {path}")


class InternalRepresentationError(WalkError, RuntimeError):
    """Raised before a walk when raw object addresses can't be trusted.

    Unsafe addressing reads the object pointer directly; the walk refuses to
    start if that pointer does not match the interpreter's own identity.
    """


class ValueNotSettableError(WalkError, AttributeError):
    """Raised when writing through a value handle whose location is read-only."""
