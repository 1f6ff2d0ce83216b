"""Tests for the repeat-visit table."""

from __future__ import annotations

from deepwalk import Value, VisitedTable, WalkInfo


def _info(obj, address):
    return WalkInfo(value=Value(obj), address=address)


def test_no_address_is_never_a_revisit():
    table = VisitedTable()
    info = _info([1], None)

    assert table.check_and_record(info) is False
    assert table.check_and_record(info) is False
    assert len(table) == 0


def test_same_address_and_type_is_revisit():
    table = VisitedTable()
    obj = [1]

    assert table.check_and_record(_info(obj, 100)) is False
    assert table.check_and_record(_info(obj, 100)) is True
    assert (100, list) in table
    assert len(table) == 1


def test_same_address_different_type_is_fresh():
    table = VisitedTable()

    assert table.check_and_record(_info([1], 100)) is False
    assert table.check_and_record(_info({"a": 1}, 100)) is False
    assert table.check_and_record(_info((1,), 100)) is False
    assert len(table) == 3
    assert (100, dict) in table


def test_contains_rejects_malformed_keys():
    table = VisitedTable()
    table.check_and_record(_info([1], 100))

    assert 100 not in table
    assert (100, list, 1) not in table
    assert (200, list) not in table
