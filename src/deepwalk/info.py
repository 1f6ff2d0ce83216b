"""Walk descriptors handed to the callback, one per visited node."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from deepwalk.kinds import Kind
from deepwalk.reflection import Value

if TYPE_CHECKING:
    from deepwalk.addressing import AddressOf


@dataclass(eq=False)
class WalkInfo:
    """Descriptor of one node reached during a walk.

    Attributes:
        value: Reflected handle; ``value.obj`` is the object, ``value.set()``
            writes through its storage location where that is allowed.
        parent: Descriptor of the enclosing node, None at the root. Only valid
            while the walk is running.
        address: Identity of the value's storage (see deepwalk.addressing),
            None when the value is not addressable under the active policy.
        is_map_key / is_map_value: Node is a key or a value of a mapping entry.
        is_struct_field: Node is a named field of an object.
        is_flat: Node is a scalar atom.
        is_visited: The (address, type) pair was already recorded in this walk.
        header_size: Approximate fixed size of the node's type, containers only.
        label: Edge label from the parent (``[0]``, ``.name``, ...).
    """

    value: Value
    parent: WalkInfo | None = field(default=None, repr=False)
    address: int | None = None
    is_map_key: bool = False
    is_map_value: bool = False
    is_struct_field: bool = False
    is_flat: bool = False
    is_visited: bool = False
    header_size: int | None = None
    label: str = ""

    @property
    def kind(self) -> Kind:
        return self.value.kind

    @property
    def has_address(self) -> bool:
        return self.address is not None

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def path(self) -> str:
        """Location of the node relative to the walk root, e.g. ``$.items[2]``."""
        labels: list[str] = []
        node: WalkInfo | None = self
        while node is not None:
            labels.append(node.label)
            node = node.parent
        return "$" + "".join(reversed(labels))


def build_info(
    value: Value,
    parent: WalkInfo | None,
    address_of: AddressOf,
    *,
    label: str | None = None,
) -> WalkInfo:
    """Create the descriptor for ``value``.

    Only computes the address; role flags are set by the caller and the visited
    table is not consulted.
    """
    if label is None:
        label = value.slot.label if value.slot is not None else ""
    return WalkInfo(
        value=value,
        parent=parent,
        address=address_of(value),
        label=label,
    )
