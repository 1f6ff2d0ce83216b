"""Tests for the redact example sanitizer."""

from __future__ import annotations

from dataclasses import dataclass

from pyrsistent import pmap

from deepwalk.examples import redact


@dataclass
class Credentials:
    user: str
    password: str


@dataclass(frozen=True)
class FrozenCredentials:
    user: str
    password: str


def test_masks_mapping_entries_and_attributes():
    config = {
        "db": Credentials(user="app", password="hunter2"),
        "API_KEY": "abc",
        "servers": [{"host": "a", "token": {"nested": "x"}}],
    }

    assert redact(config) == 3
    assert config == {
        "db": Credentials(user="app", password="***"),
        "API_KEY": "***",
        "servers": [{"host": "a", "token": "***"}],
    }


def test_custom_names_and_mask():
    data = {"pin": 1234, "name": "x"}
    assert redact(data, names=["PIN"], mask=None) == 1
    assert data == {"pin": None, "name": "x"}


def test_read_only_locations_are_left_alone():
    frozen = FrozenCredentials(user="app", password="hunter2")
    persistent = pmap({"secret": "s"})

    assert redact([frozen, persistent]) == 0
    assert frozen.password == "hunter2"
    assert persistent["secret"] == "s"
