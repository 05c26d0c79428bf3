"""Shared fixtures and helpers for tests."""

import textwrap
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from diffscope.core.ast import parse_source
from diffscope.core.context import RunContext
from diffscope.core.engine import build_dispatch_table, check_source
from diffscope.core.ports.check import Check
from diffscope.models import SourceFile, SyntaxNode, Violation

_REPO_ROOT = Path(__file__).parent.parent

JavaParser = Callable[..., SourceFile]
CheckRunner = Callable[..., list[Violation]]


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def java(source: str) -> str:
    """Dedent an inline Java snippet so that its first code line is line 1."""
    return textwrap.dedent(source).lstrip("\n")


def find_method(source: SourceFile, name: str) -> SyntaxNode:
    tree = source.tree
    for node in tree.nodes:
        if node.symbol not in ("method_declaration", "constructor_declaration"):
            continue
        if any(tree.nodes[i].symbol == "identifier" and tree.nodes[i].text == name for i in node.children):
            return node
    raise AssertionError(f"No declaration named {name}")


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parse_java() -> JavaParser:
    """Parse an inline Java snippet into a :class:`SourceFile`."""

    def _parse(source: str, path: str = "Demo.java") -> SourceFile:
        return parse_source(java(source), path)

    return _parse


@pytest.fixture
def run_checks(parse_java: JavaParser) -> CheckRunner:
    """Run checks over an inline snippet and return the violations."""

    def _run(
        checks: Sequence[Check],
        source: str,
        run: RunContext | None = None,
        path: str = "Demo.java",
    ) -> list[Violation]:
        context = run if run is not None else RunContext.from_changes([])
        report = check_source(parse_java(source, path), build_dispatch_table(checks), context)
        return report.violations

    return _run
