"""Read-only traversal primitives over a :class:`~diffscope.models.SyntaxTree`.

All functions are pure: they never mutate the tree and never perform I/O.
Sequences returned here are lazy and restartable, so a caller may iterate the
same result more than once.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from diffscope.errors import NodeNotFoundError
from diffscope.models import NodeKind, SyntaxNode, SyntaxTree


class SiblingSequence(Iterable[SyntaxNode]):
    """Nodes from ``start`` following next-sibling links until the chain ends."""

    def __init__(self, tree: SyntaxTree, start: SyntaxNode | None) -> None:
        self._tree = tree
        self._start = start

    def __iter__(self) -> Iterator[SyntaxNode]:
        current = self._start
        while current is not None:
            yield current
            current = self._tree.next_sibling(current)


def children(tree: SyntaxTree, node: SyntaxNode) -> list[SyntaxNode]:
    return [tree.nodes[i] for i in node.children]


def siblings_from(tree: SyntaxTree, node: SyntaxNode | None) -> SiblingSequence:
    return SiblingSequence(tree, node)


def try_first_child_of_kind(tree: SyntaxTree, node: SyntaxNode, kind: NodeKind) -> SyntaxNode | None:
    for child in siblings_from(tree, tree.first_child(node)):
        if child.kind is kind:
            return child
    return None


def first_child_of_kind(tree: SyntaxTree, node: SyntaxNode, kind: NodeKind) -> SyntaxNode:
    found = try_first_child_of_kind(tree, node, kind)
    if found is None:
        raise NodeNotFoundError(
            f"Can't find element of kind {kind.value} at {node.symbol}[{node.line}:{node.column}] in {tree.path}"
        )
    return found


def try_first_child_of_symbol(tree: SyntaxTree, node: SyntaxNode, *symbols: str) -> SyntaxNode | None:
    for child in siblings_from(tree, tree.first_child(node)):
        if child.symbol in symbols:
            return child
    return None


def last_child_of_symbol(tree: SyntaxTree, node: SyntaxNode, symbol: str) -> SyntaxNode | None:
    """Walk backwards from the last child to the first one carrying ``symbol``."""
    child = tree.last_child(node)
    while child is not None and child.symbol != symbol:
        child = tree.previous_sibling(child)
    return child


def recursive_descendants(
    tree: SyntaxTree,
    node: SyntaxNode,
    prune: Callable[[SyntaxNode], bool] | None = None,
) -> Iterator[SyntaxNode]:
    """Pre-order walk over the subtree below ``node``.

    ``node`` itself and its siblings are not yielded. When ``prune`` returns
    true for a node, neither that node nor anything below it is produced.
    """
    stack = [tree.nodes[i] for i in reversed(node.children)]
    while stack:
        current = stack.pop()
        if prune is not None and prune(current):
            continue
        yield current
        stack.extend(tree.nodes[i] for i in reversed(current.children))


def ancestors(tree: SyntaxTree, node: SyntaxNode) -> Iterator[SyntaxNode]:
    current = tree.parent(node)
    while current is not None:
        yield current
        current = tree.parent(current)
