"""Declaration helpers shared by the checks."""

from __future__ import annotations

import re
from dataclasses import dataclass

from diffscope.config import AccessLevel
from diffscope.core import navigator
from diffscope.models import NodeKind, SourceFile, SyntaxNode, SyntaxTree

COMMENT_KINDS = frozenset({NodeKind.SINGLE_LINE_COMMENT, NodeKind.BLOCK_COMMENT_BEGIN})

_ACCESS_KEYWORDS = {
    "public": AccessLevel.PUBLIC,
    "protected": AccessLevel.PROTECTED,
    "private": AccessLevel.PRIVATE,
}
_IMPLICITLY_PUBLIC_BODIES = frozenset({"interface_declaration", "annotation_type_declaration"})
_ANONYMOUS_BOUNDARY = "object_creation_expression"
_SETTER_RE = re.compile(r"^set[A-Z].*")
_GETTER_RE = re.compile(r"^(is|get)[A-Z].*")
_LINE_COMMENT_RE = re.compile(r"^\s*//.*$")


@dataclass(frozen=True)
class Body:
    open: SyntaxNode
    close: SyntaxNode

    @property
    def open_line(self) -> int:
        return self.open.line

    @property
    def close_line(self) -> int:
        return self.close.line


def is_comment(node: SyntaxNode) -> bool:
    return node.kind in COMMENT_KINDS


def find_body(tree: SyntaxTree, declaration: SyntaxNode) -> Body | None:
    """Body node and its closing brace, or ``None`` for abstract/native declarations."""
    body = navigator.try_first_child_of_kind(tree, declaration, NodeKind.BODY)
    if body is None:
        return None
    close = navigator.last_child_of_symbol(tree, body, "}")
    if close is None:
        return None
    return Body(open=body, close=close)


def body_statements(tree: SyntaxTree, body: Body) -> list[SyntaxNode]:
    return [
        child
        for child in navigator.children(tree, body.open)
        if child.kind is not NodeKind.BLOCK_DELIMITER and not is_comment(child)
    ]


def body_line_count(tree: SyntaxTree, body: Body) -> int:
    """Lines between the braces; an empty body counts as one line."""
    if not body_statements(tree, body):
        return 1
    return body.close_line - body.open_line - 1


def declaration_name(tree: SyntaxTree, node: SyntaxNode) -> str | None:
    identifier = navigator.try_first_child_of_kind(tree, node, NodeKind.IDENTIFIER)
    return identifier.text if identifier is not None else None


def annotations(tree: SyntaxTree, declaration: SyntaxNode) -> list[SyntaxNode]:
    modifiers = navigator.try_first_child_of_kind(tree, declaration, NodeKind.MODIFIERS)
    if modifiers is None:
        return []
    return [child for child in navigator.children(tree, modifiers) if child.kind is NodeKind.ANNOTATION]


def annotation_name(tree: SyntaxTree, annotation: SyntaxNode) -> str | None:
    name = navigator.try_first_child_of_symbol(tree, annotation, "identifier", "scoped_identifier")
    return name.text if name is not None else None


def has_annotation(tree: SyntaxTree, declaration: SyntaxNode, names: frozenset[str]) -> bool:
    """Match either the annotation as written or its simple name."""
    if not names:
        return False
    for annotation in annotations(tree, declaration):
        name = annotation_name(tree, annotation)
        if name is None:
            continue
        if name in names or name.rsplit(".", 1)[-1] in names:
            return True
    return False


def _explicit_access(tree: SyntaxTree, node: SyntaxNode) -> AccessLevel | None:
    modifiers = navigator.try_first_child_of_kind(tree, node, NodeKind.MODIFIERS)
    if modifiers is None:
        return None
    for child in navigator.children(tree, modifiers):
        if child.text in _ACCESS_KEYWORDS:
            return _ACCESS_KEYWORDS[child.text]
    return None


def enclosing_type(tree: SyntaxTree, node: SyntaxNode) -> SyntaxNode | None:
    """Nearest type declaration strictly above ``node``; anonymous classes end the search."""
    for ancestor in navigator.ancestors(tree, node):
        if ancestor.kind is NodeKind.TYPE_DECLARATION:
            return ancestor
        if ancestor.symbol == _ANONYMOUS_BOUNDARY:
            return None
    return None


def access_level(tree: SyntaxTree, node: SyntaxNode) -> AccessLevel:
    """Access level from the modifier list, with implicit rules for interface and enum members."""
    explicit = _explicit_access(tree, node)
    if explicit is not None:
        return explicit
    owner = enclosing_type(tree, node)
    if owner is not None:
        if owner.symbol == "enum_declaration" and node.symbol == "constructor_declaration":
            return AccessLevel.PRIVATE
        if owner.symbol in _IMPLICITLY_PUBLIC_BODIES:
            return AccessLevel.PUBLIC
    return AccessLevel.PACKAGE


def surrounding_access_level(tree: SyntaxTree, node: SyntaxNode) -> AccessLevel | None:
    """Access level of the nearest enclosing type.

    ``None`` when the root is reached first or the node lives in an anonymous
    class.
    """
    current: SyntaxNode | None = node
    while current is not None:
        if current.kind is NodeKind.TYPE_DECLARATION:
            return access_level(tree, current)
        if current.symbol == _ANONYMOUS_BOUNDARY:
            return None
        current = tree.parent(current)
    return None


def outermost_type_name(tree: SyntaxTree, node: SyntaxNode) -> str | None:
    name: str | None = None
    for ancestor in navigator.ancestors(tree, node):
        if ancestor.kind is NodeKind.TYPE_DECLARATION:
            name = declaration_name(tree, ancestor) or name
    return name


def has_javadoc_before(source: SourceFile, declaration: SyntaxNode) -> bool:
    """True if a Javadoc comment ends right above the declaration.

    Blank lines and ``//`` comment lines between the comment and the
    declaration are skipped.
    """
    line_no = declaration.line - 1
    while line_no > 0 and (source.is_blank(line_no) or _LINE_COMMENT_RE.match(source.line(line_no))):
        line_no -= 1
    return line_no in source.tree.javadoc_end_lines


def _parameter_count(tree: SyntaxTree, declaration: SyntaxNode) -> int:
    parameters = navigator.try_first_child_of_symbol(tree, declaration, "formal_parameters")
    if parameters is None:
        return 0
    return sum(
        1 for child in navigator.children(tree, parameters) if child.symbol in ("formal_parameter", "spread_parameter")
    )


def _single_statement(tree: SyntaxTree, declaration: SyntaxNode) -> SyntaxNode | None:
    body = find_body(tree, declaration)
    if body is None:
        return None
    statements = body_statements(tree, body)
    return statements[0] if len(statements) == 1 else None


def is_setter(tree: SyntaxTree, declaration: SyntaxNode) -> bool:
    """``void setX(T x) { this.x = x; }`` shaped methods."""
    if declaration.symbol != "method_declaration":
        return False
    name = declaration_name(tree, declaration)
    if name is None or not _SETTER_RE.match(name):
        return False
    if navigator.try_first_child_of_symbol(tree, declaration, "void_type") is None:
        return False
    if _parameter_count(tree, declaration) != 1:
        return False
    statement = _single_statement(tree, declaration)
    if statement is None or statement.symbol != "expression_statement":
        return False
    return navigator.try_first_child_of_symbol(tree, statement, "assignment_expression") is not None


def is_getter(tree: SyntaxTree, declaration: SyntaxNode) -> bool:
    """``T getX() { return x; }`` shaped methods, including ``isX``."""
    if declaration.symbol != "method_declaration":
        return False
    name = declaration_name(tree, declaration)
    if name is None or not _GETTER_RE.match(name):
        return False
    if _parameter_count(tree, declaration) != 0:
        return False
    statement = _single_statement(tree, declaration)
    return statement is not None and statement.symbol == "return_statement"
