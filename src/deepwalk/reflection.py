"""Reflected value handles.

A Value wraps an object together with the storage location it was read from.
The location is what makes a value addressable and, where the owner allows it,
settable: writing through the handle replaces the object in its container and
the walk continues with the replacement.
"""

from __future__ import annotations

import dataclasses
import reprlib
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from deepwalk.errors import InvalidValueError, ValueNotSettableError
from deepwalk.kinds import ATOMIC_KINDS, MISSING, Kind, is_namedtuple, kind_of, slot_names

_label_repr = reprlib.Repr()
_label_repr.maxstring = 40
_label_repr.maxother = 40


def short_repr(obj: Any) -> str:
    """Size-limited repr used in path labels."""
    return _label_repr.repr(obj)


class Access(Enum):
    """How a slot reaches its value inside the owner."""

    INDEX = "index"  # owner[key], sequences
    ENTRY = "entry"  # owner[key], mappings
    ATTRIBUTE = "attribute"  # getattr(owner, key)
    CELL = "cell"  # owner.cell_contents
    REFERENT = "referent"  # owner(), weak references


@dataclass(frozen=True)
class Slot:
    """A storage location: an owner plus the key the value lives under."""

    owner: Any
    key: Any
    access: Access
    writable: bool = False

    @property
    def label(self) -> str:
        match self.access:
            case Access.INDEX:
                return f"[{self.key}]"
            case Access.ENTRY:
                return f"[{short_repr(self.key)}]"
            case Access.ATTRIBUTE:
                return f".{self.key}"
            case Access.CELL:
                return ".cell_contents"
            case Access.REFERENT:
                return "()"

    def load(self) -> Any:
        match self.access:
            case Access.INDEX | Access.ENTRY:
                return self.owner[self.key]
            case Access.ATTRIBUTE:
                return getattr(self.owner, self.key)
            case Access.CELL:
                return self.owner.cell_contents
            case Access.REFERENT:
                return self.owner()

    def store(self, new: Any, *, force: bool = False) -> None:
        if not self.writable:
            if force and self.access is Access.ATTRIBUTE and not isinstance(self.owner, tuple):
                object.__setattr__(self.owner, self.key, new)
                return
            raise ValueNotSettableError(
                f"{type(self.owner).__qualname__}{self.label} is not settable"
            )
        match self.access:
            case Access.INDEX | Access.ENTRY:
                self.owner[self.key] = new
            case Access.ATTRIBUTE:
                setattr(self.owner, self.key, new)
            case Access.CELL:
                self.owner.cell_contents = new
            case Access.REFERENT:
                raise ValueNotSettableError("weak reference targets can't be replaced")


def _fields_writable(obj: Any) -> bool:
    if is_namedtuple(obj):
        return False
    params = getattr(type(obj), "__dataclass_params__", None)
    return not (params is not None and params.frozen)


class Value:
    """Reflected handle over one object reached during a walk."""

    __slots__ = ("_obj", "_slot", "_kind")

    def __init__(self, obj: Any = MISSING, slot: Slot | None = None):
        self._obj = obj
        self._slot = slot
        self._kind: Kind | None = None

    @classmethod
    def invalid(cls) -> Value:
        return cls()

    def __repr__(self) -> str:
        if self._obj is MISSING:
            return "Value(<invalid>)"
        return f"Value({short_repr(self._obj)}, kind={self.kind.name})"

    # -- identity ----------------------------------------------------------

    @property
    def obj(self) -> Any:
        if self._obj is MISSING:
            raise InvalidValueError()
        return self._obj

    @property
    def kind(self) -> Kind:
        if self._kind is None:
            self._kind = kind_of(self._obj)
        return self._kind

    @property
    def type(self) -> type:
        return type(self.obj)

    @property
    def slot(self) -> Slot | None:
        return self._slot

    def is_valid(self) -> bool:
        return self._obj is not MISSING

    def can_addr(self) -> bool:
        """True when the value has its own identity (any kind but FLAT and STRING).

        Independent of the storage location: a root or a set member can be
        addressable without being settable.
        """
        return self.is_valid() and self.kind not in ATOMIC_KINDS

    def can_set(self) -> bool:
        return self._slot is not None and self._slot.writable

    def set(self, new: Any, *, force: bool = False) -> None:
        """Replace the value in its storage location.

        ``force=True`` writes attributes of frozen objects through
        ``object.__setattr__``. Locations without an owner-side write path
        (tuple items, mapping keys, set members, weak references) always raise.
        """
        if self._slot is None:
            raise ValueNotSettableError("value has no storage location")
        self._slot.store(new, force=force)
        self._obj = new
        self._kind = None

    # -- children ----------------------------------------------------------

    def len(self) -> int:
        return len(self.obj)

    def index(self, i: int) -> Value:
        """Item ``i`` of an ARRAY or SLICE value."""
        owner = self.obj
        return Value(owner[i], Slot(owner, i, Access.INDEX, writable=self.kind is Kind.SLICE))

    def map_keys(self) -> list[Any]:
        """Snapshot of a MAP value's keys, in iteration order."""
        return list(self.obj.keys())

    def map_key(self, key: Any) -> Value:
        return Value(key)

    def map_index(self, key: Any) -> Value:
        owner = self.obj
        writable = isinstance(owner, MutableMapping)
        return Value(owner[key], Slot(owner, key, Access.ENTRY, writable=writable))

    def members(self) -> list[Value]:
        """Members of a SET value. Members have no storage location."""
        return [Value(member) for member in list(self.obj)]

    def fields(self) -> Iterator[tuple[str, Value]]:
        """Named fields of a STRUCT value in declared order.

        Dataclass fields, then named tuple fields, then slots and ``__dict__``
        entries for plain objects. Unset slots are not reported.
        """
        owner = self.obj
        writable = _fields_writable(owner)
        for name in _field_names(owner):
            try:
                child = getattr(owner, name)
            except AttributeError:
                continue
            yield name, Value(child, Slot(owner, name, Access.ATTRIBUTE, writable=writable))

    def is_nil(self) -> bool:
        """True for a dead weak reference or an empty closure cell."""
        owner = self.obj
        if self.kind is not Kind.POINTER:
            return owner is None
        if callable(owner):
            return owner() is None
        try:
            owner.cell_contents
        except ValueError:
            return True
        return False

    def elem(self) -> Value:
        """Target of a non-nil POINTER value."""
        owner = self.obj
        if callable(owner):
            return Value(owner(), Slot(owner, None, Access.REFERENT))
        return Value(owner.cell_contents, Slot(owner, None, Access.CELL, writable=True))


def _field_names(obj: Any) -> list[str]:
    if dataclasses.is_dataclass(obj):
        return [f.name for f in dataclasses.fields(obj)]
    if is_namedtuple(obj):
        return list(type(obj)._fields)

    names = list(slot_names(type(obj)))
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.extend(name for name in instance_dict if name not in names)
    return names
