"""Approximate fixed header sizes, for diagnostics only.

The numbers come from the running interpreter (``__basicsize__``: the size of
an instance without its variable-length part or external buffers). They vary
between interpreters and versions and carry no meaning for the walk itself.
"""

from __future__ import annotations

from deepwalk.kinds import Kind
from deepwalk.reflection import Value

HEADER_KINDS = frozenset(
    {
        Kind.STRING,
        Kind.ARRAY,
        Kind.SLICE,
        Kind.MAP,
        Kind.SET,
        Kind.POINTER,
        Kind.CHAN,
        Kind.FUNC,
    }
)


def header_size(value: Value) -> int | None:
    """Fixed per-instance size of ``value``'s type, or None for kinds without a header."""
    if not value.is_valid() or value.kind not in HEADER_KINDS:
        return None
    size = getattr(value.type, "__basicsize__", None)
    return size if isinstance(size, int) and size > 0 else None
