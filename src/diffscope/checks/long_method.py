from __future__ import annotations

from diffscope.checks.common import find_body, has_javadoc_before, outermost_type_name
from diffscope.config import LongMethodOptions
from diffscope.core.context import FileContext
from diffscope.messages import JAVADOC_MISSED_ON_LONG_METHOD
from diffscope.models import NodeKind, SyntaxNode


class LongMethodDocumentationCheck:
    """Long methods in matching classes must carry a Javadoc comment."""

    name = "long-method-documentation"
    kinds = frozenset({NodeKind.DECLARATION})

    def __init__(self, options: LongMethodOptions | None = None) -> None:
        self.options = options or LongMethodOptions()

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        if node.symbol != "method_declaration":
            return
        class_name = outermost_type_name(context.tree, node)
        if class_name is None or not self.options.class_name_regex.fullmatch(class_name):
            return
        body = find_body(context.tree, node)
        if body is None:
            return
        length = body.close_line - body.open_line + 1
        if length > self.options.max and not has_javadoc_before(context.source, node):
            context.log(node.line, node.column, JAVADOC_MISSED_ON_LONG_METHOD, length, self.options.max, check=self.name)
