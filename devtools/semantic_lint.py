from __future__ import annotations

import ast
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
KINDS_FILE = PROJECT_ROOT / "src" / "deepwalk" / "kinds.py"
WALKER_FILE = PROJECT_ROOT / "src" / "deepwalk" / "walker.py"

# Reaches the wildcard case on purpose.
_WILDCARD_KINDS = frozenset({"UNKNOWN"})


def _parse(path: Path) -> ast.Module:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def declared_kinds(tree: ast.Module) -> list[str]:
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name == "Kind":
            return [
                target.id
                for stmt in node.body
                if isinstance(stmt, ast.Assign)
                for target in stmt.targets
                if isinstance(target, ast.Name)
            ]
    return []


class RouteCaseVisitor(ast.NodeVisitor):
    """Collect ``Kind.X`` patterns from the match statement in ``_route``."""

    def __init__(self) -> None:
        self._in_route = False
        self.routed: dict[str, int] = {}

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        previous = self._in_route
        self._in_route = node.name == "_route"
        self.generic_visit(node)
        self._in_route = previous

    def visit_MatchValue(self, node: ast.MatchValue) -> None:
        value = node.value
        if (
            self._in_route
            and isinstance(value, ast.Attribute)
            and isinstance(value.value, ast.Name)
            and value.value.id == "Kind"
        ):
            self.routed.setdefault(value.attr, node.lineno)
        self.generic_visit(node)


def main() -> int:
    kinds = declared_kinds(_parse(KINDS_FILE))
    visitor = RouteCaseVisitor()
    visitor.visit(_parse(WALKER_FILE))

    missing = [kind for kind in kinds if kind not in visitor.routed and kind not in _WILDCARD_KINDS]
    stale = [kind for kind in visitor.routed if kind not in kinds]

    if not kinds:
        print(f"semantic-lint: no Kind enum found in {KINDS_FILE}")
        return 1
    if not missing and not stale:
        print("semantic-lint: ok")
        return 0

    print("semantic-lint: walker routes out of sync with Kind:")
    for kind in missing:
        print(f"  - {WALKER_FILE}: Kind.{kind} has no case in _route")
    for kind in stale:
        line = visitor.routed[kind]
        print(f"  - {WALKER_FILE}:{line}: Kind.{kind} is not declared in {KINDS_FILE}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
