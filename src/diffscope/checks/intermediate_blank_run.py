"""More than one consecutive empty line inside a declaration."""

from __future__ import annotations

from collections.abc import Iterable

from diffscope.core import navigator
from diffscope.core.context import FileContext
from diffscope.messages import INTERMEDIATE_EMPTY_LINES
from diffscope.models import NodeKind, SyntaxNode, SyntaxTree

_SPANNING_KINDS = frozenset({NodeKind.BLOCK_COMMENT_BEGIN, NodeKind.TEXT_BLOCK_BEGIN})


def _lines_of(node: SyntaxNode) -> Iterable[int]:
    if node.kind in _SPANNING_KINDS:
        return range(node.line, node.end_line + 1)
    return (node.line,)


def non_empty_lines(tree: SyntaxTree, declaration: SyntaxNode) -> set[int]:
    lines: set[int] = set()
    for node in navigator.recursive_descendants(tree, declaration):
        if node.kind is not NodeKind.ANNOTATION:
            lines.update(_lines_of(node))
    return lines


def find_blank_runs(occupied: set[int]) -> list[int]:
    """Every line of each run of two or more absent lines.

    Each absent line that follows another absent line reports the pair, so a
    run of three blank lines yields four entries (two overlapping pairs).
    """
    if not occupied:
        return []
    found: list[int] = []
    previous_empty = False
    for line_no in range(min(occupied), max(occupied)):
        if line_no in occupied:
            previous_empty = False
            continue
        if previous_empty:
            found.extend((line_no - 1, line_no))
        previous_empty = True
    return found


class IntermediateBlankRunCheck:
    name = "intermediate-blank-run"
    kinds = frozenset({NodeKind.DECLARATION})

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        for line_no in find_blank_runs(non_empty_lines(context.tree, node)):
            context.log(line_no, 0, INTERMEDIATE_EMPTY_LINES, check=self.name)
