from typing import Protocol

from diffscope.core.context import FileContext
from diffscope.models import NodeKind, SyntaxNode


class Check(Protocol):
    name: str
    kinds: frozenset[NodeKind]

    def visit(self, node: SyntaxNode, context: FileContext) -> None: ...
