"""Pytest configuration and test helpers."""

from __future__ import annotations

import platform
from collections.abc import Callable
from typing import Any

import pytest

from deepwalk import Kind, Signal, WalkInfo

requires_cpython = pytest.mark.skipif(
    platform.python_implementation() != "CPython",
    reason="raw object addresses equal id() only on CPython",
)


class Boom(Exception):
    """Error raised by test callbacks to abort a walk."""


class Recorder:
    """Walk callback that records every descriptor it receives.

    Args:
        react: Optional hook called after recording; its return value is
            returned to the walker (None, Signal.SKIP, or raise to abort).
    """

    def __init__(self, react: Callable[[WalkInfo], Signal | None] | None = None):
        self.infos: list[WalkInfo] = []
        self._react = react

    def __call__(self, info: WalkInfo) -> Signal | None:
        self.infos.append(info)
        if self._react is not None:
            return self._react(info)
        return None

    @property
    def objs(self) -> list[Any]:
        return [info.value.obj for info in self.infos]

    @property
    def kinds(self) -> list[Kind]:
        return [info.kind for info in self.infos]

    @property
    def paths(self) -> list[str]:
        return [info.path for info in self.infos]


def fail_on_call(limit: int) -> Recorder:
    """Recorder that raises Boom on its ``limit``-th call."""
    recorder: Recorder

    def react(info: WalkInfo) -> None:
        if len(recorder.infos) == limit:
            raise Boom(f"call {limit}")

    recorder = Recorder(react)
    return recorder
