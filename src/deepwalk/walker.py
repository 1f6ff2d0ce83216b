"""Generic, policy-free deep walker over arbitrary object graphs.

Visits every value reachable from a root in depth-first pre-order and hands a
WalkInfo descriptor to a callback for each one. Containers report before their
children; children follow in index order (sequences), iteration order with
each key right before its value (mappings and sets), or declared field order
(objects).

The walker never changes the graph itself. Callbacks may, through
``info.value.set()`` or by mutating objects in place, and the walk descends
into whatever the graph holds after the callback returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from deepwalk.addressing import AddressOf, address_policy, check_representation
from deepwalk.errors import (
    InternalRepresentationError,
    InvalidValueError,
    Signal,
    SkipSubtree,
    UnknownKindError,
    WalkError,
)
from deepwalk.info import WalkInfo, build_info
from deepwalk.kinds import ATOMIC_KINDS, Kind
from deepwalk.options import WalkOptions
from deepwalk.reflection import Value, short_repr
from deepwalk.sizes import header_size
from deepwalk.visited import VisitedTable

logger = logging.getLogger(__name__)

WalkFunc = Callable[[WalkInfo], "Signal | None"]


# ---------------------------------------------------------------------------
# Walker implementation
# ---------------------------------------------------------------------------


class _WalkState:
    """Internal walk state: one instance per Walker.walk() call."""

    __slots__ = ("_callback", "_loop_protection", "_unsafe", "_address_of", "_visited")

    def __init__(self, callback: WalkFunc, options: WalkOptions) -> None:
        self._callback = callback
        self._loop_protection: bool = options.loop_protection
        self._unsafe: bool = options.unsafe_addresses
        self._address_of: AddressOf = address_policy(options.unsafe_addresses)
        self._visited = VisitedTable()

    # -- entry point -------------------------------------------------------

    def walk(self, root: Any) -> None:
        if self._unsafe and not check_representation():
            raise InternalRepresentationError(
                "raw object addresses don't match id() in this interpreter; "
                "unsafe addressing can't be used"
            )
        self._walk_value(self._build(Value(root), None))

    # -- dispatch ----------------------------------------------------------

    def _build(
        self, value: Value, parent: WalkInfo | None, *, label: str | None = None
    ) -> WalkInfo:
        return build_info(value, parent, self._address_of, label=label)

    def _walk_value(self, info: WalkInfo) -> bool:
        """Visit one node. Returns False if the node's own callback asked to skip."""
        if info.has_address:
            info.is_visited = self._visited.check_and_record(info)
            # atoms share identity by accident; they are always reported
            if info.is_visited and self._loop_protection and info.kind not in ATOMIC_KINDS:
                return True
        return self._route(info.kind, info)

    def _route(self, kind: Kind, info: WalkInfo) -> bool:
        match kind:
            case Kind.INVALID:
                raise InvalidValueError(info.path)
            case Kind.FLAT:
                return self._walk_flat(info)
            case Kind.STRING | Kind.CHAN | Kind.FUNC:
                return self._walk_leaf(info)
            case Kind.ARRAY | Kind.SLICE:
                return self._walk_sequence(info)
            case Kind.MAP:
                return self._walk_map(info)
            case Kind.SET:
                return self._walk_set(info)
            case Kind.STRUCT:
                return self._walk_struct(info)
            case Kind.POINTER:
                return self._walk_pointer(info)
            case _:
                raise UnknownKindError(info.value.type, info.path)

    def _emit(self, info: WalkInfo) -> bool:
        try:
            signal = self._callback(info)
        except SkipSubtree:
            return False
        return signal is not Signal.SKIP

    # -- kind handlers -----------------------------------------------------

    def _walk_flat(self, info: WalkInfo) -> bool:
        info.is_flat = True
        return self._emit(info)

    def _walk_leaf(self, info: WalkInfo) -> bool:
        info.header_size = header_size(info.value)
        return self._emit(info)

    def _walk_sequence(self, info: WalkInfo) -> bool:
        info.header_size = header_size(info.value)
        if not self._emit(info):
            return False

        value = info.value
        for i in range(value.len()):
            # callbacks may have shrunk the sequence
            if i >= value.len():
                break
            self._walk_value(self._build(value.index(i), info))
        return True

    def _walk_map(self, info: WalkInfo) -> bool:
        info.header_size = header_size(info.value)
        if not self._emit(info):
            return False

        value = info.value
        mapping = value.obj
        for key in value.map_keys():
            key_info = self._build(value.map_key(key), info, label=f"<key {short_repr(key)}>")
            key_info.is_map_key = True
            if not self._walk_value(key_info):
                continue
            # the key's callback may have removed the entry
            if key not in mapping:
                continue
            value_info = self._build(value.map_index(key), info)
            value_info.is_map_value = True
            self._walk_value(value_info)
        return True

    def _walk_set(self, info: WalkInfo) -> bool:
        info.header_size = header_size(info.value)
        if not self._emit(info):
            return False

        for member in info.value.members():
            self._walk_value(self._build(member, info, label=f"{{{short_repr(member.obj)}}}"))
        return True

    def _walk_struct(self, info: WalkInfo) -> bool:
        if not self._emit(info):
            return False

        for _name, field_value in info.value.fields():
            field_info = self._build(field_value, info)
            field_info.is_struct_field = True
            self._walk_value(field_info)
        return True

    def _walk_pointer(self, info: WalkInfo) -> bool:
        info.header_size = header_size(info.value)
        if not self._emit(info):
            return False

        if info.value.is_nil():
            return True
        self._walk_value(self._build(info.value.elem(), info))
        return True


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class Walker:
    """Reusable walk configuration: a callback plus WalkOptions.

    The callback receives one WalkInfo per node and returns None (or
    ``Signal.CONTINUE``) to descend, ``Signal.SKIP`` (or raises SkipSubtree) to
    leave the node's children out, or raises any other exception to abort the
    walk; that exception reaches the caller of ``walk()`` unchanged.

    Setters are chainable::

        Walker(callback).with_loop_protection(False).walk(root)

    Each ``walk()`` runs with its own visited table, so one Walker can be used
    for any number of walks. A single walk is not thread-safe.
    """

    __slots__ = ("_callback", "_options")

    def __init__(
        self,
        callback: WalkFunc,
        *,
        loop_protection: bool = True,
        unsafe_addresses: bool = False,
    ) -> None:
        self._callback = callback
        self._options = WalkOptions(
            loop_protection=loop_protection,
            unsafe_addresses=unsafe_addresses,
        )

    @property
    def options(self) -> WalkOptions:
        return self._options

    def with_loop_protection(self, enabled: bool = True) -> Walker:
        self._options = self._options.set(loop_protection=enabled)
        return self

    def with_unsafe_addresses(self, enabled: bool = True) -> Walker:
        self._options = self._options.set(unsafe_addresses=enabled)
        return self

    def walk(self, root: Any) -> None:
        """Walk everything reachable from ``root``. A None root is a no-op."""
        if root is None:
            return

        logger.debug(
            "walking %s (loop_protection=%s, unsafe_addresses=%s)",
            type(root).__qualname__,
            self._options.loop_protection,
            self._options.unsafe_addresses,
        )
        try:
            _WalkState(self._callback, self._options).walk(root)
        except WalkError as exc:
            logger.debug("walk of %s stopped: %s", type(root).__qualname__, exc)
            raise


def walk(
    root: Any,
    callback: WalkFunc,
    *,
    loop_protection: bool = True,
    unsafe_addresses: bool = False,
) -> None:
    """Walk ``root`` once with a fresh Walker."""
    Walker(
        callback,
        loop_protection=loop_protection,
        unsafe_addresses=unsafe_addresses,
    ).walk(root)
