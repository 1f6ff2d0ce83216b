"""The walker must route every declared Kind."""

from __future__ import annotations

from devtools.semantic_lint import KINDS_FILE, _parse, declared_kinds, main
from deepwalk import Kind


def test_declared_kinds_match_enum():
    assert declared_kinds(_parse(KINDS_FILE)) == [kind.name for kind in Kind]


def test_walker_routes_every_kind(capsys):
    assert main() == 0
    assert "semantic-lint: ok" in capsys.readouterr().out
