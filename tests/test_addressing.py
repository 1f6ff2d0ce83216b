"""Tests for safe and unsafe addressing."""

from __future__ import annotations

import pytest

from deepwalk import InternalRepresentationError, Kind, Value, Walker, check_representation, walk
from deepwalk.addressing import address_policy, raw_address, safe_address, unsafe_address
from tests.conftest import Recorder, requires_cpython


class Box:
    pass


def test_safe_address_requires_identity():
    assert safe_address(Value.invalid()) is None

    inner = [1]
    assert safe_address(Value(inner)) == id(inner)
    assert safe_address(Value([inner]).index(0)) == id(inner)
    assert safe_address(Value(["text"]).index(0)) is None
    assert safe_address(Value(7)) is None


def test_safe_address_of_keys_and_members():
    key = ("k",)
    assert safe_address(Value({key: 1}).map_key(key)) == id(key)
    assert safe_address(Value({"k": 1}).map_key("k")) is None
    assert safe_address(Value(frozenset({key})).members()[0]) == id(key)


def test_unsafe_address_of_invalid_value_is_none():
    assert unsafe_address(Value.invalid()) is None


def test_address_policy_selects_function():
    assert address_policy(False) is safe_address
    assert address_policy(True) is unsafe_address


@requires_cpython
class TestUnsafeAddressing:
    def test_representation_check_passes(self):
        assert check_representation()

    def test_raw_address_is_id(self):
        obj = Box()
        assert raw_address(obj) == id(obj)

    def test_unaddressable_values_get_addresses(self):
        root = [1]
        assert unsafe_address(Value(root)) == id(root)
        assert unsafe_address(Value({"k": 1}).map_key("k")) == id("k")

    def test_addressable_values_match_safe_addressing(self):
        box = Box()
        box.items = [[1], {"a": (2,)}]  # type: ignore[attr-defined]

        safe = Recorder()
        unsafe = Recorder()
        walk(box, safe)
        walk(box, unsafe, unsafe_addresses=True)

        assert len(safe.infos) == len(unsafe.infos)
        for safe_info, unsafe_info in zip(safe.infos, unsafe.infos, strict=True):
            if safe_info.has_address:
                assert safe_info.address == unsafe_info.address
            assert unsafe_info.has_address

    def test_root_has_address(self):
        recorder = Recorder()
        root = {"a": 1}
        walk(root, recorder, unsafe_addresses=True)

        assert recorder.infos[0].address == id(root)
        assert recorder.infos[0].kind is Kind.MAP


def test_check_failure_raises_runtime_error(monkeypatch):
    monkeypatch.setattr("deepwalk.walker.check_representation", lambda: False)
    with pytest.raises(RuntimeError):
        Walker(Recorder(), unsafe_addresses=True).walk({"a": 1})


def test_check_reports_false_on_mismatch(monkeypatch):
    monkeypatch.setattr("deepwalk.addressing.raw_address", lambda obj: id(obj) + 1)
    assert check_representation() is False


def test_check_reports_false_when_read_fails(monkeypatch):
    def broken(obj):
        raise ValueError("no ctypes")

    monkeypatch.setattr("deepwalk.addressing.raw_address", broken)
    assert check_representation() is False
    with pytest.raises(InternalRepresentationError):
        walk([1], Recorder(), unsafe_addresses=True)
