"""Blank lines directly after the opening brace or before the closing brace of a body."""

from __future__ import annotations

from diffscope.checks.common import find_body
from diffscope.core.context import FileContext
from diffscope.messages import EMPTY_LINES_AT_THE_END
from diffscope.models import NodeKind, SourceFile, SyntaxNode


def leading_blank_lines(source: SourceFile, open_line: int, close_line: int) -> list[int]:
    found: list[int] = []
    for line_no in range(open_line + 1, close_line + 1):
        if not source.is_blank(line_no):
            break
        found.append(line_no)
    return found


def trailing_blank_lines(source: SourceFile, open_line: int, close_line: int) -> list[int]:
    found: list[int] = []
    for line_no in range(close_line - 1, open_line + 1, -1):
        if not source.is_blank(line_no):
            break
        found.append(line_no)
    return found


def find_blank_edges(source: SourceFile, open_line: int, close_line: int) -> list[int]:
    leading = leading_blank_lines(source, open_line, close_line)
    seen = set(leading)
    return leading + [n for n in trailing_blank_lines(source, open_line, close_line) if n not in seen]


class TrailingBlankLineCheck:
    name = "trailing-blank-line"
    kinds = frozenset({NodeKind.DECLARATION})

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        body = find_body(context.tree, node)
        if body is None:
            return
        for line_no in find_blank_edges(context.source, body.open_line, body.close_line):
            context.log(line_no, 0, EMPTY_LINES_AT_THE_END, check=self.name)
