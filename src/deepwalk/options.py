"""Immutable walk configuration."""

from __future__ import annotations

from pyrsistent import PRecord, field


class WalkOptions(PRecord):
    """Feature toggles for one walk.

    Attributes:
        loop_protection: Do not re-enter a container whose (address, type)
            pair was already visited. Without it the callback sees every
            revisit and must break cycles itself.
        unsafe_addresses: Read raw object pointers for every value instead of
            reporting addresses only for addressable ones. Checked against the
            interpreter before the walk starts.
    """

    loop_protection = field(type=bool, initial=True, mandatory=True)
    unsafe_addresses = field(type=bool, initial=False, mandatory=True)
