from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from diffscope.core import navigator
from diffscope.core.ast import parse_file
from diffscope.core.context import FileContext, RunContext
from diffscope.core.ports.check import Check
from diffscope.errors import TreeShapeError
from diffscope.models import FileReport, NodeKind, SourceFile

logger = logging.getLogger(__name__)

DispatchTable = dict[NodeKind, list[Check]]


def build_dispatch_table(checks: Iterable[Check]) -> DispatchTable:
    """Map each node kind to the checks interested in it, keeping registration order."""
    table: DispatchTable = {}
    for check in checks:
        for kind in sorted(check.kinds, key=lambda k: k.value):
            table.setdefault(kind, []).append(check)
    return table


def check_source(source: SourceFile, table: DispatchTable, run: RunContext) -> FileReport:
    context = FileContext(source=source, run=run)
    tree = source.tree
    for node in navigator.recursive_descendants(tree, tree.root):
        for check in table.get(node.kind, ()):
            try:
                check.visit(node, context)
            except TreeShapeError as exc:
                logger.debug("%s skipped %s at %d:%d: %s", check.name, node.symbol, node.line, node.column, exc)
    return FileReport(path=source.path, violations=context.violations)


def check_file(path: str | Path, table: DispatchTable, run: RunContext) -> FileReport:
    logger.debug("Checking %s", path)
    return check_source(parse_file(path, language="java"), table, run)


def check_files(
    paths: Sequence[str | Path],
    checks: Sequence[Check],
    run: RunContext,
    jobs: int = 1,
) -> list[FileReport]:
    """Check every file; results keep the order of ``paths``."""
    table = build_dispatch_table(checks)
    if jobs <= 1 or len(paths) <= 1:
        return [check_file(path, table, run) for path in paths]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda p: check_file(p, table, run), paths))
