"""Approximate deep memory footprint of an object graph."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any

from deepwalk import WalkInfo, check_representation, walk


@dataclass(frozen=True)
class SizeReport:
    nodes: int
    total_bytes: int
    header_bytes: int


def deep_sizeof(root: Any) -> SizeReport:
    """Sum ``sys.getsizeof`` over every distinct node reachable from ``root``.

    Uses raw addresses where the interpreter supports them, so shared atoms
    are counted once as well.
    """
    nodes = 0
    total = 0
    headers = 0

    def visit(info: WalkInfo) -> None:
        nonlocal nodes, total, headers
        if info.is_visited:
            return
        nodes += 1
        total += sys.getsizeof(info.value.obj)
        headers += info.header_size or 0

    walk(root, visit, unsafe_addresses=check_representation())
    return SizeReport(nodes=nodes, total_bytes=total, header_bytes=headers)
