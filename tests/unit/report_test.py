"""Unit tests for violation formatting."""

import json

from diffscope.messages import EMPTY_LINES_AT_THE_END, JAVADOC_MISSED_ON_LONG_METHOD, MESSAGES, render_message
from diffscope.models import FileReport, Violation
from diffscope.report import format_jsonl, format_location, format_plain, violation_entry


def test_format_location_omits_zero_column() -> None:
    assert format_location(Violation("A.java", 3, 0, EMPTY_LINES_AT_THE_END)) == "A.java:3"
    assert format_location(Violation("A.java", 3, 7, EMPTY_LINES_AT_THE_END)) == "A.java:3:7"


def test_format_plain_uses_check_name() -> None:
    violation = Violation("A.java", 3, 0, EMPTY_LINES_AT_THE_END, check="trailing-blank-line")

    assert format_plain(violation) == f"A.java:3: {MESSAGES[EMPTY_LINES_AT_THE_END]} [trailing-blank-line]"


def test_format_plain_falls_back_to_key() -> None:
    violation = Violation("A.java", 3, 0, EMPTY_LINES_AT_THE_END)

    assert format_plain(violation).endswith(f"[{EMPTY_LINES_AT_THE_END}]")


def test_violation_entry_renders_message() -> None:
    violation = Violation("src/A.java", 12, 5, JAVADOC_MISSED_ON_LONG_METHOD, (200, 150), "long-method-documentation")

    assert violation_entry(violation) == {
        "path": "src/A.java",
        "line": 12,
        "col": 5,
        "code": JAVADOC_MISSED_ON_LONG_METHOD,
        "check": "long-method-documentation",
        "message": "No JavaDoc for method where length more then 150. Current size is 200",
        "severity": "error",
    }


def test_format_jsonl_one_object_per_line() -> None:
    violations = [
        Violation("A.java", 1, 0, EMPTY_LINES_AT_THE_END),
        Violation("B.java", 2, 3, JAVADOC_MISSED_ON_LONG_METHOD, (10, 5)),
    ]

    lines = format_jsonl(violations).splitlines()

    assert [json.loads(line)["path"] for line in lines] == ["A.java", "B.java"]
    assert lines[0] == json.dumps(violation_entry(violations[0]), sort_keys=True)


def test_format_jsonl_empty() -> None:
    assert format_jsonl([]) == ""


def test_render_message_unknown_key_returns_key() -> None:
    assert render_message("custom.key", (1, 2)) == "custom.key"


def test_file_report_ok() -> None:
    assert FileReport("A.java").ok
    assert not FileReport("A.java", [Violation("A.java", 1, 0, "k")]).ok
