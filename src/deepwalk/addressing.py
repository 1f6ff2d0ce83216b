"""Addressing policies for walk descriptors.

Safe addressing reports ``id(obj)`` for every value that carries its own
identity, the root included. Unsafe addressing reads the object pointer
through ctypes for every value, immutable atoms included. The raw read is
only meaningful where ``id()`` is the object's memory address, so the walk
checks that first (see check_representation).
"""

from __future__ import annotations

import ctypes
import logging
from collections.abc import Callable

from deepwalk.reflection import Value

logger = logging.getLogger(__name__)

AddressOf = Callable[[Value], "int | None"]


def raw_address(obj: object) -> int:
    """Object pointer as stored in the reference itself."""
    ref = ctypes.py_object(obj)
    address = ctypes.c_void_p.from_address(ctypes.addressof(ref)).value
    return address or 0


def check_representation() -> bool:
    """True when raw object pointers agree with ``id()`` in this interpreter."""
    probe = [0]
    try:
        matches = raw_address(probe) == id(probe)
    except (TypeError, ValueError, OSError) as exc:
        logger.debug("raw address read failed: %s", exc)
        return False
    if not matches:
        logger.debug("raw address of probe differs from id(); unsafe addressing unavailable")
    return matches


def safe_address(value: Value) -> int | None:
    if not value.can_addr():
        return None
    return id(value.obj)


def unsafe_address(value: Value) -> int | None:
    if not value.is_valid():
        return None
    return raw_address(value.obj)


def address_policy(unsafe: bool) -> AddressOf:
    return unsafe_address if unsafe else safe_address
