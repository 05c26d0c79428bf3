from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from diffscope.core.languages import detect_language_from_path, normalize_language
from diffscope.models import NodeKind, SourceFile, SyntaxNode, SyntaxTree

_DECLARATION_SYMBOLS = frozenset({"method_declaration", "constructor_declaration", "compact_constructor_declaration"})
_TYPE_DECLARATION_SYMBOLS = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)
_TYPE_REFERENCE_SYMBOLS = frozenset(
    {
        "void_type",
        "integral_type",
        "floating_point_type",
        "boolean_type",
        "type_identifier",
        "scoped_type_identifier",
        "generic_type",
        "array_type",
    }
)
_KIND_BY_SYMBOL = {
    **{symbol: NodeKind.DECLARATION for symbol in _DECLARATION_SYMBOLS},
    **{symbol: NodeKind.TYPE_DECLARATION for symbol in _TYPE_DECLARATION_SYMBOLS},
    **{symbol: NodeKind.TYPE_REFERENCE for symbol in _TYPE_REFERENCE_SYMBOLS},
    "modifiers": NodeKind.MODIFIERS,
    "marker_annotation": NodeKind.ANNOTATION,
    "annotation": NodeKind.ANNOTATION,
    "block": NodeKind.BODY,
    "constructor_body": NodeKind.BODY,
    "{": NodeKind.BLOCK_DELIMITER,
    "}": NodeKind.BLOCK_DELIMITER,
    "line_comment": NodeKind.SINGLE_LINE_COMMENT,
    "block_comment": NodeKind.BLOCK_COMMENT_BEGIN,
    "text_block": NodeKind.TEXT_BLOCK_BEGIN,
    "identifier": NodeKind.IDENTIFIER,
}
# Spanning tokens get a synthetic child marking their last line.
_END_KIND = {
    NodeKind.BLOCK_COMMENT_BEGIN: (NodeKind.BLOCK_COMMENT_END, "block_comment_end"),
    NodeKind.TEXT_BLOCK_BEGIN: (NodeKind.TEXT_BLOCK_END, "text_block_end"),
}
_TEXT_SYMBOLS = frozenset({"scoped_identifier"})


@dataclass
class _Draft:
    index: int
    kind: NodeKind
    symbol: str
    line: int
    column: int
    end_line: int
    end_column: int
    text: str | None
    parent: int | None
    children: list[int] = field(default_factory=list)


def _node_text(node: Node) -> str:
    raw = node.text or b""
    return raw.decode("utf-8", errors="replace")


def _kind_for(node: Node) -> NodeKind:
    symbol = node.type
    if symbol == "comment":
        # Older grammars emit a single comment symbol for both styles.
        text = _node_text(node)
        return NodeKind.SINGLE_LINE_COMMENT if text.startswith("//") else NodeKind.BLOCK_COMMENT_BEGIN
    if symbol == "string_literal" and _node_text(node).startswith('"""'):
        return NodeKind.TEXT_BLOCK_BEGIN
    return _KIND_BY_SYMBOL.get(symbol, NodeKind.OTHER)


def _freeze(path: str, drafts: list[_Draft]) -> SyntaxTree:
    previous: dict[int, int | None] = {}
    following: dict[int, int | None] = {}
    for draft in drafts:
        siblings = draft.children
        for position, child in enumerate(siblings):
            previous[child] = siblings[position - 1] if position > 0 else None
            following[child] = siblings[position + 1] if position + 1 < len(siblings) else None

    nodes = tuple(
        SyntaxNode(
            index=d.index,
            kind=d.kind,
            symbol=d.symbol,
            line=d.line,
            column=d.column,
            end_line=d.end_line,
            end_column=d.end_column,
            text=d.text,
            parent=d.parent,
            children=tuple(d.children),
            previous_sibling=previous.get(d.index),
            next_sibling=following.get(d.index),
        )
        for d in drafts
    )
    return SyntaxTree(path=path, nodes=nodes)


def build_tree(source_bytes: bytes, path: str = "<memory>", language: str = "java") -> SyntaxTree:
    """Parse ``source_bytes`` and convert the tree-sitter tree into an index-addressed arena.

    Nodes are numbered in pre-order, so the root is always index 0 and a parent
    always has a smaller index than its children.
    """
    parser = get_parser(cast(SupportedLanguage, normalize_language(language)))
    ts_tree = parser.parse(source_bytes)

    drafts: list[_Draft] = []
    stack: list[tuple[Node, int | None]] = [(ts_tree.root_node, None)]
    while stack:
        ts_node, parent = stack.pop()
        kind = _kind_for(ts_node)
        keep_text = ts_node.child_count == 0 or ts_node.type in _TEXT_SYMBOLS
        draft = _Draft(
            index=len(drafts),
            kind=kind,
            symbol=ts_node.type,
            line=ts_node.start_point[0] + 1,
            column=ts_node.start_point[1] + 1,
            end_line=ts_node.end_point[0] + 1,
            end_column=ts_node.end_point[1] + 1,
            text=_node_text(ts_node) if keep_text else None,
            parent=parent,
        )
        drafts.append(draft)
        if parent is not None:
            drafts[parent].children.append(draft.index)

        if kind in _END_KIND:
            end_kind, end_symbol = _END_KIND[kind]
            end = _Draft(
                index=len(drafts),
                kind=end_kind,
                symbol=end_symbol,
                line=draft.end_line,
                column=max(draft.end_column - 1, 1),
                end_line=draft.end_line,
                end_column=draft.end_column,
                text=None,
                parent=draft.index,
            )
            drafts.append(end)
            draft.children.append(end.index)
            continue

        stack.extend((child, draft.index) for child in reversed(ts_node.children))

    return _freeze(path, drafts)


def split_lines(text: str) -> tuple[str, ...]:
    """Split on ``\\n`` only, the way the parser counts rows; a trailing ``\\r`` is dropped from each line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return tuple(line.removesuffix("\r") for line in lines)


def parse_source(source: str | bytes, path: str = "<memory>", language: str = "java") -> SourceFile:
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    text = source_bytes.decode("utf-8", errors="replace")
    return SourceFile(
        path=path,
        lines=split_lines(text),
        tree=build_tree(source_bytes, path, language),
    )


def parse_file(path: str | Path, language: str | None = None) -> SourceFile:
    file_path = Path(path)
    resolved_language = normalize_language(language) if language else detect_language_from_path(file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source_bytes, str(file_path), resolved_language)
