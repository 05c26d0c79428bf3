"""Missing Javadoc on methods touched by the current change set.

Enforcing documentation on every method of a legacy code base is noisy. This
check only looks at files that changed relative to the base branch, and only
at methods whose body contains an added or deleted line. Within those, the
usual exemptions apply: short methods, allowed annotations and, optionally,
simple getters and setters.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from diffscope.checks.common import (
    access_level,
    body_line_count,
    find_body,
    has_annotation,
    has_javadoc_before,
    is_getter,
    is_setter,
    outermost_type_name,
    surrounding_access_level,
)
from diffscope.config import MissingDocumentationOptions
from diffscope.core.context import FileContext
from diffscope.messages import JAVADOC_MISSING
from diffscope.models import NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


class Decision(Enum):
    REPORT = "report"
    NOT_CHANGED_FILE = "not-changed-file"
    IGNORED_CLASS = "ignored-class"
    ACCESS_LEVEL = "access-level"
    NO_BODY = "no-body"
    NO_CHANGES = "no-changes"
    UNTOUCHED = "untouched"
    DOCUMENTED = "documented"
    EXEMPT = "exempt"


class ScopedDocumentationCheck:
    name = "missing-documentation"
    kinds = frozenset({NodeKind.DECLARATION})

    def __init__(self, options: MissingDocumentationOptions | None = None) -> None:
        self.options = options or MissingDocumentationOptions()

    def allowlist(self, context: FileContext) -> frozenset[str]:
        if self.options.enabled_git:
            return frozenset(context.run.changed_file_names(self.options.file_extensions))
        return self.options.changed_file_set or frozenset()

    def _accepts_access(self, context: FileContext, node: SyntaxNode) -> bool:
        accepted = self.options.access_modifiers
        surrounding = surrounding_access_level(context.tree, node)
        if surrounding is None:
            return False
        return surrounding in accepted and access_level(context.tree, node) in accepted

    def _is_exempt(self, context: FileContext, node: SyntaxNode, line_count: int) -> bool:
        tree = context.tree
        if self.options.allow_missing_property_javadoc and (is_setter(tree, node) or is_getter(tree, node)):
            return True
        return line_count <= self.options.min_line_count or has_annotation(
            tree, node, self.options.allowed_annotations
        )

    def decide(self, node: SyntaxNode, context: FileContext) -> Decision:
        tree = context.tree
        filename = Path(context.path).name
        if filename not in self.allowlist(context):
            return Decision.NOT_CHANGED_FILE

        pattern = self.options.ignore_class_name_regex
        if pattern is not None:
            root_name = outermost_type_name(tree, node)
            if root_name is not None and pattern.fullmatch(root_name):
                return Decision.IGNORED_CLASS

        if not self._accepts_access(context, node):
            return Decision.ACCESS_LEVEL

        body = find_body(tree, node)
        if body is None:
            return Decision.NO_BODY

        change = context.run.changes_for(context.path)
        if change is None:
            logger.debug("Couldn't get git changes for %s", context.path)
            return Decision.NO_CHANGES
        if not change.touches(body.open_line, body.close_line):
            return Decision.UNTOUCHED

        if has_javadoc_before(context.source, node):
            return Decision.DOCUMENTED
        if self._is_exempt(context, node, body_line_count(tree, body)):
            return Decision.EXEMPT
        return Decision.REPORT

    def visit(self, node: SyntaxNode, context: FileContext) -> None:
        if node.symbol != "method_declaration":
            return
        decision = self.decide(node, context)
        logger.debug("%s:%d %s", context.path, node.line, decision.value)
        if decision is Decision.REPORT:
            context.log(node.line, node.column, JAVADOC_MISSING, check=self.name)
