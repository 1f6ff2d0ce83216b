"""Runtime kind classification.

Every object resolves to exactly one Kind. The kind decides which traversal
route the walker takes and which children a value exposes.
"""

from __future__ import annotations

import asyncio
import dataclasses
import datetime
import decimal
import enum
import fractions
import functools
import queue
import re
import types
import uuid
import warnings
import weakref
from collections.abc import Mapping, MutableSequence, Sequence
from collections.abc import Set as AbstractSet
from enum import Enum
from pathlib import PurePath

from pyrsistent import PMap, pmap


class Kind(Enum):
    """Structural category of a runtime value."""

    INVALID = "invalid"
    FLAT = "flat"  # scalar atoms: numbers, bool, None, enum members, ...
    STRING = "string"  # str and byte strings
    ARRAY = "array"  # fixed sequences (tuple)
    SLICE = "slice"  # mutable sequences (list)
    MAP = "map"
    SET = "set"
    STRUCT = "struct"  # objects with named fields
    POINTER = "pointer"  # weakref / closure cell, may be nil
    CHAN = "chan"  # queues and generators, never drained
    FUNC = "func"
    UNKNOWN = "unknown"


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()
"""Marker stored in an empty value handle."""

# Kinds whose identity is a runtime artifact (small ints, interned strings).
ATOMIC_KINDS = frozenset({Kind.FLAT, Kind.STRING})

CONTAINER_KINDS = frozenset(
    {Kind.ARRAY, Kind.SLICE, Kind.MAP, Kind.SET, Kind.STRUCT, Kind.POINTER}
)

_FLAT_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    fractions.Fraction,
    enum.Enum,
    type,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    PurePath,
    re.Pattern,
    range,
    type(Ellipsis),
    type(NotImplemented),
)

_STRING_TYPES: tuple[type, ...] = (str, bytes, bytearray, memoryview)

_POINTER_TYPES: tuple[type, ...] = (weakref.ref, types.CellType)

_FUNC_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    functools.partial,
    staticmethod,
    classmethod,
)

_CHAN_TYPES: tuple[type, ...] = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
)

# Proxies forward isinstance() to their referent and can't be dereferenced.
_OPAQUE_TYPES = frozenset({weakref.ProxyType, weakref.CallableProxyType})

_registered: PMap = pmap()


# ---------------------------------------------------------------------------
# Kind table extension
# ---------------------------------------------------------------------------


def register_kind(cls: type, kind: Kind) -> None:
    """Route instances of ``cls`` (and its subclasses) to ``kind``.

    Registered entries take precedence over structural classification.
    Pointer routes can't be registered: dereferencing is only defined for
    weak references and closure cells.
    """
    if not isinstance(cls, type):
        raise TypeError(f"register_kind() expects a class, got {cls!r}")
    if kind in (Kind.INVALID, Kind.POINTER):
        raise ValueError(f"{kind.name} can't be registered for {cls.__qualname__}")

    global _registered
    if cls in _registered:
        warnings.warn(
            f"{cls.__qualname__} is already registered as {_registered[cls].name}; "
            f"replacing with {kind.name}.",
            UserWarning,
            stacklevel=2,
        )
    _registered = _registered.set(cls, kind)


def unregister_kind(cls: type) -> None:
    """Remove an entry added by ``register_kind``. Missing entries are ignored."""
    global _registered
    _registered = _registered.discard(cls)


def registered_kinds() -> PMap:
    """Snapshot of the registered class-to-kind entries."""
    return _registered


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@functools.cache
def slot_names(cls: type) -> tuple[str, ...]:
    """Instance slot names declared along the MRO, base class first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        declared = klass.__dict__.get("__slots__", ())
        if isinstance(declared, str):
            declared = (declared,)
        for name in declared:
            if name in ("__dict__", "__weakref__") or name in names:
                continue
            names.append(name)
    return tuple(names)


def is_namedtuple(obj: object) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def _lookup_registered(cls: type) -> Kind | None:
    if not _registered:
        return None
    for klass in cls.__mro__:
        kind = _registered.get(klass)
        if kind is not None:
            return kind
    return None


def kind_of(obj: object) -> Kind:
    """Resolve the traversal kind of ``obj``."""
    if obj is MISSING:
        return Kind.INVALID

    cls = type(obj)
    registered = _lookup_registered(cls)
    if registered is not None:
        return registered

    if cls in _OPAQUE_TYPES:
        return Kind.UNKNOWN
    # bool/enum/type before anything structural: enum members and classes have __dict__
    if isinstance(obj, _FLAT_TYPES):
        return Kind.FLAT
    if isinstance(obj, _STRING_TYPES):
        return Kind.STRING
    if isinstance(obj, _POINTER_TYPES):
        return Kind.POINTER
    if isinstance(obj, _FUNC_TYPES):
        return Kind.FUNC
    if isinstance(obj, _CHAN_TYPES):
        return Kind.CHAN
    if isinstance(obj, Mapping):
        return Kind.MAP
    if isinstance(obj, AbstractSet):
        return Kind.SET
    if is_namedtuple(obj) or dataclasses.is_dataclass(obj):
        return Kind.STRUCT
    if isinstance(obj, MutableSequence):
        return Kind.SLICE
    if isinstance(obj, Sequence):
        return Kind.ARRAY
    if hasattr(obj, "__dict__") or slot_names(cls):
        return Kind.STRUCT
    return Kind.UNKNOWN
