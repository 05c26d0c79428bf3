"""Unit tests for check dispatch and multi-file runs."""

import threading
from pathlib import Path

import pytest

from diffscope.checks import (
    AnnotationGapCheck,
    IntermediateBlankRunCheck,
    LongMethodDocumentationCheck,
    ScopedDocumentationCheck,
    TrailingBlankLineCheck,
    create_checks,
)
from diffscope.config import build_config
from diffscope.core.context import FileContext, RunContext
from diffscope.core.engine import build_dispatch_table, check_file, check_files
from diffscope.errors import DiffAcquisitionError, NodeNotFoundError
from diffscope.models import NodeKind, SyntaxNode
from tests.conftest import CheckRunner, java

GAPPY = java(
    """
    class Gappy {
        @Override

        public String toString() {

            return "x";
        }
    }
    """
)


class ExplodingCheck:
    name = "exploding"
    kinds = frozenset({NodeKind.DECLARATION})

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        raise NodeNotFoundError(f"nothing at {node.line}")


class RecordingCheck:
    name = "recording"
    kinds = frozenset({NodeKind.DECLARATION, NodeKind.ANNOTATION})

    def __init__(self) -> None:
        self.seen: list[tuple[str, int]] = []

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        self.seen.append((node.symbol, node.line))


class UnreachableRemoteVcs:
    """Local diff works, fetching the base branch fails."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.fetches = 0
        self._lock = threading.Lock()

    def repo_root(self) -> Path:
        return self.root

    def current_branch(self) -> str:
        return "feature"

    def fetch(self) -> None:
        with self._lock:
            self.fetches += 1
        raise DiffAcquisitionError(["git", "fetch"], "fatal: unable to access remote")

    def diff_names(self, ref: str) -> list[str]:
        return []

    def diff_unified(self, ref: str) -> str:
        return ""


def test_dispatch_table_groups_by_kind() -> None:
    gap, recording = AnnotationGapCheck(), RecordingCheck()

    table = build_dispatch_table([gap, recording])

    assert table[NodeKind.DECLARATION] == [gap, recording]
    assert table[NodeKind.ANNOTATION] == [recording]
    assert NodeKind.BODY not in table


def test_nodes_are_visited_in_source_order(run_checks: CheckRunner) -> None:
    recording = RecordingCheck()

    run_checks([recording], GAPPY)

    assert recording.seen == [("method_declaration", 2), ("marker_annotation", 2)]


def test_tree_shape_errors_skip_only_the_failing_check(run_checks: CheckRunner) -> None:
    violations = run_checks([ExplodingCheck(), TrailingBlankLineCheck()], GAPPY)

    assert [(v.check, v.line) for v in violations] == [("trailing-blank-line", 5)]


def test_check_files_keeps_input_order(tmp_path: Path) -> None:
    paths = []
    for index in range(6):
        path = tmp_path / f"Gappy{index}.java"
        path.write_text(GAPPY.replace("class Gappy", f"class Gappy{index}"), encoding="utf-8")
        paths.append(path)
    checks = [AnnotationGapCheck(), TrailingBlankLineCheck()]

    sequential = check_files(paths, checks, RunContext.from_changes([]), jobs=1)
    parallel = check_files(paths, checks, RunContext.from_changes([]), jobs=4)

    assert [r.path for r in parallel] == [str(p) for p in paths]
    assert [r.violations for r in parallel] == [r.violations for r in sequential]
    assert all(len(r.violations) == 2 for r in parallel)


def test_parallel_run_fetches_once_when_fetch_fails(tmp_path: Path) -> None:
    paths = []
    for index in range(4):
        path = tmp_path / f"Gappy{index}.java"
        path.write_text(GAPPY.replace("class Gappy", f"class Gappy{index}"), encoding="utf-8")
        paths.append(path)
    vcs = UnreachableRemoteVcs(tmp_path)

    with pytest.raises(DiffAcquisitionError, match="git fetch"):
        check_files(paths, [ScopedDocumentationCheck()], RunContext(vcs), jobs=4)

    assert vcs.fetches == 1


def test_check_file_reads_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "Gappy.java"
    path.write_text(GAPPY, encoding="utf-8")

    report = check_file(path, build_dispatch_table([AnnotationGapCheck()]), RunContext.from_changes([]))

    assert not report.ok
    assert [v.line for v in report.violations] == [4]


def test_create_checks_follows_configuration() -> None:
    config = build_config(
        {
            "checks": ["long-method-documentation", "annotation-gap", "missing-documentation"],
            "long-method-documentation": {"max": 10},
            "missing-documentation": {"minLineCount": 3},
        }
    )

    checks = create_checks(config)

    assert [type(c) for c in checks] == [
        LongMethodDocumentationCheck,
        AnnotationGapCheck,
        ScopedDocumentationCheck,
    ]
    long_method, _, documentation = checks
    assert isinstance(long_method, LongMethodDocumentationCheck)
    assert long_method.options.max == 10
    assert isinstance(documentation, ScopedDocumentationCheck)
    assert documentation.options.min_line_count == 3


def test_default_checks() -> None:
    checks = create_checks(build_config())

    assert [type(c) for c in checks] == [
        AnnotationGapCheck,
        TrailingBlankLineCheck,
        IntermediateBlankRunCheck,
        ScopedDocumentationCheck,
    ]
