"""Blank lines or comments between annotations and the declaration they annotate.

Every adjacent pair of annotations is checked, and so is the pair formed by the
last annotation and the declaration signature::

    @Override
                                <- reported
    public String toString() {
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator

from diffscope.checks.common import annotations, is_comment
from diffscope.core import navigator
from diffscope.core.context import FileContext
from diffscope.messages import EMPTY_LINES_BETWEEN_ANNOTATION
from diffscope.models import NodeKind, SyntaxNode, SyntaxTree


def signature_node(tree: SyntaxTree, declaration: SyntaxNode) -> SyntaxNode | None:
    modifiers = navigator.try_first_child_of_kind(tree, declaration, NodeKind.MODIFIERS)
    if modifiers is None:
        return None
    for sibling in navigator.siblings_from(tree, tree.next_sibling(modifiers)):
        if not is_comment(sibling):
            return sibling
    return None


def _chain(tree: SyntaxTree, start: SyntaxNode, modifiers: SyntaxNode) -> Iterator[SyntaxNode]:
    """Siblings after ``start``, continuing past the modifier list into the declaration."""
    following: Iterable[SyntaxNode] = navigator.siblings_from(tree, tree.next_sibling(start))
    if start.parent == modifiers.index:
        following = itertools.chain(following, navigator.siblings_from(tree, tree.next_sibling(modifiers)))
    return iter(following)


def _is_gap(node: SyntaxNode, previous: SyntaxNode) -> bool:
    return is_comment(node) or node.line > previous.end_line + 1


def find_gap(tree: SyntaxTree, start: SyntaxNode, end: SyntaxNode, modifiers: SyntaxNode) -> SyntaxNode | None:
    previous = start
    for current in _chain(tree, start, modifiers):
        if _is_gap(current, previous):
            return current
        if current.index == end.index:
            break
        previous = current
    return None


def find_annotation_gaps(tree: SyntaxTree, declaration: SyntaxNode) -> list[SyntaxNode]:
    found = annotations(tree, declaration)
    if not found:
        return []
    modifiers = tree.parent(found[0])
    signature = signature_node(tree, declaration)
    if modifiers is None:
        return []
    elements = [*found, signature] if signature is not None else found

    offenders: list[SyntaxNode] = []
    for start, end in itertools.pairwise(elements):
        offender = find_gap(tree, start, end, modifiers)
        if offender is not None:
            offenders.append(offender)
    return offenders


class AnnotationGapCheck:
    name = "annotation-gap"
    kinds = frozenset({NodeKind.DECLARATION})

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        for offender in find_annotation_gaps(context.tree, node):
            context.log(offender.line, offender.column, EMPTY_LINES_BETWEEN_ANNOTATION, check=self.name)
