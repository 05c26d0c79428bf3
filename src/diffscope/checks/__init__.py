from diffscope.checks.annotation_gap import AnnotationGapCheck
from diffscope.checks.intermediate_blank_run import IntermediateBlankRunCheck
from diffscope.checks.long_method import LongMethodDocumentationCheck
from diffscope.checks.missing_documentation import ScopedDocumentationCheck
from diffscope.checks.trailing_blank_line import TrailingBlankLineCheck
from diffscope.config import DiffscopeConfig
from diffscope.core.ports.check import Check


def create_checks(config: DiffscopeConfig) -> list[Check]:
    """Instantiate the enabled checks in configuration order."""
    factories = {
        AnnotationGapCheck.name: AnnotationGapCheck,
        TrailingBlankLineCheck.name: TrailingBlankLineCheck,
        IntermediateBlankRunCheck.name: IntermediateBlankRunCheck,
        ScopedDocumentationCheck.name: lambda: ScopedDocumentationCheck(config.missing_documentation),
        LongMethodDocumentationCheck.name: lambda: LongMethodDocumentationCheck(config.long_method),
    }
    return [factories[name]() for name in config.checks]


__all__ = [
    "AnnotationGapCheck",
    "IntermediateBlankRunCheck",
    "LongMethodDocumentationCheck",
    "ScopedDocumentationCheck",
    "TrailingBlankLineCheck",
    "create_checks",
]
