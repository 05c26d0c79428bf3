from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from enum import Enum

from diffscope.messages import render_message


class NodeKind(Enum):
    DECLARATION = "declaration"
    MODIFIERS = "modifiers"
    ANNOTATION = "annotation"
    BODY = "body"
    BLOCK_DELIMITER = "block_delimiter"
    SINGLE_LINE_COMMENT = "single_line_comment"
    BLOCK_COMMENT_BEGIN = "block_comment_begin"
    BLOCK_COMMENT_END = "block_comment_end"
    TEXT_BLOCK_BEGIN = "text_block_begin"
    TEXT_BLOCK_END = "text_block_end"
    IDENTIFIER = "identifier"
    TYPE_REFERENCE = "type_reference"
    TYPE_DECLARATION = "type_declaration"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """One node of a per-file arena.

    ``line`` and ``column`` are 1-based. Relations are stored as indices into
    the owning :class:`SyntaxTree`.
    """

    index: int
    kind: NodeKind
    symbol: str
    line: int
    column: int
    end_line: int
    end_column: int
    text: str | None = None
    parent: int | None = None
    children: tuple[int, ...] = ()
    previous_sibling: int | None = None
    next_sibling: int | None = None


@dataclass(frozen=True)
class SyntaxTree:
    path: str
    nodes: tuple[SyntaxNode, ...]

    @property
    def root(self) -> SyntaxNode:
        return self.nodes[0]

    def node(self, index: int | None) -> SyntaxNode | None:
        if index is None:
            return None
        return self.nodes[index]

    def parent(self, node: SyntaxNode) -> SyntaxNode | None:
        return self.node(node.parent)

    def next_sibling(self, node: SyntaxNode) -> SyntaxNode | None:
        return self.node(node.next_sibling)

    def previous_sibling(self, node: SyntaxNode) -> SyntaxNode | None:
        return self.node(node.previous_sibling)

    def first_child(self, node: SyntaxNode) -> SyntaxNode | None:
        return self.nodes[node.children[0]] if node.children else None

    def last_child(self, node: SyntaxNode) -> SyntaxNode | None:
        return self.nodes[node.children[-1]] if node.children else None

    @cached_property
    def javadoc_end_lines(self) -> frozenset[int]:
        """End lines of every ``/** ... */`` comment, computed once per tree."""
        return frozenset(
            node.end_line
            for node in self.nodes
            if node.kind is NodeKind.BLOCK_COMMENT_BEGIN
            and node.text is not None
            and node.text.startswith("/**")
            and node.text != "/**/"
        )

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class SourceFile:
    path: str
    lines: tuple[str, ...]
    tree: SyntaxTree

    @property
    def name(self) -> str:
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]

    def line(self, line_no: int) -> str:
        """Return the raw text of a 1-based line, or an empty string when out of range."""
        if 1 <= line_no <= len(self.lines):
            return self.lines[line_no - 1]
        return ""

    def is_blank(self, line_no: int) -> bool:
        return not self.line(line_no).strip()


@dataclass(frozen=True)
class Violation:
    path: str
    line: int
    column: int
    key: str
    args: tuple[object, ...] = ()
    check: str = ""

    @property
    def message(self) -> str:
        return render_message(self.key, self.args)


@dataclass
class FileReport:
    path: str
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations
