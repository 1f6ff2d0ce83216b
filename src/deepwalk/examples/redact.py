"""In-place sanitizer: mask values stored under sensitive names."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from deepwalk import SKIP, Access, Signal, WalkInfo, walk

SENSITIVE_NAMES = frozenset({"password", "secret", "token", "api_key"})


def redact(root: Any, *, names: Iterable[str] = SENSITIVE_NAMES, mask: Any = "***") -> int:
    """Replace every settable value stored under one of ``names`` with ``mask``.

    Matches mapping keys and attribute names, case-insensitively. Masked
    subtrees are not walked further. Returns the number of values replaced.
    """
    wanted = frozenset(name.lower() for name in names)
    replaced = 0

    def visit(info: WalkInfo) -> Signal | None:
        nonlocal replaced
        slot = info.value.slot
        if slot is None or slot.access not in (Access.ENTRY, Access.ATTRIBUTE):
            return None
        if not isinstance(slot.key, str) or slot.key.lower() not in wanted:
            return None
        if not info.value.can_set():
            return None
        info.value.set(mask)
        replaced += 1
        return SKIP

    walk(root, visit)
    return replaced
