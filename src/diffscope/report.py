import json
from collections.abc import Iterable

from diffscope.models import Violation


def format_location(violation: Violation) -> str:
    if violation.column > 0:
        return f"{violation.path}:{violation.line}:{violation.column}"
    return f"{violation.path}:{violation.line}"


def format_plain(violation: Violation) -> str:
    return f"{format_location(violation)}: {violation.message} [{violation.check or violation.key}]"


def violation_entry(violation: Violation) -> dict[str, object]:
    return {
        "path": violation.path,
        "line": violation.line,
        "col": violation.column,
        "code": violation.key,
        "check": violation.check,
        "message": violation.message,
        "severity": "error",
    }


def format_jsonl(violations: Iterable[Violation]) -> str:
    """One JSON object per line, keys sorted so output is stable across runs."""
    return "\n".join(json.dumps(violation_entry(v), sort_keys=True) for v in violations)
