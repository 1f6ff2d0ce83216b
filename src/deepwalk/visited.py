"""Repeat-visit detection for a single walk."""

from __future__ import annotations

from typing import Any

from deepwalk.info import WalkInfo


class VisitedTable:
    """Addresses seen in one walk, each with the set of types observed there.

    The (address, type) pair is the key: one address may legitimately be
    reached as different types. Recorded objects are kept alive until the
    table is dropped, so an address can't be recycled by the allocator while
    the walk is still comparing against it.
    """

    __slots__ = ("_seen", "_keepalive")

    def __init__(self) -> None:
        self._seen: dict[int, set[type]] = {}
        self._keepalive: list[Any] = []

    def check_and_record(self, info: WalkInfo) -> bool:
        """Return True if ``info``'s (address, type) was already recorded.

        Records the pair otherwise. Descriptors without an address are never
        revisits and are not recorded.
        """
        if not info.has_address:
            return False
        value_type = info.value.type
        types_seen = self._seen.setdefault(info.address, set())
        if value_type in types_seen:
            return True
        types_seen.add(value_type)
        self._keepalive.append(info.value.obj)
        return False

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        address, value_type = key
        return value_type in self._seen.get(address, ())

    def __len__(self) -> int:
        return sum(len(types_seen) for types_seen in self._seen.values())
