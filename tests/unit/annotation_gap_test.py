"""Unit tests for the annotation gap check."""

from diffscope.checks.annotation_gap import AnnotationGapCheck, find_annotation_gaps, signature_node
from diffscope.messages import EMPTY_LINES_BETWEEN_ANNOTATION
from tests.conftest import CheckRunner, JavaParser, find_method


def test_adjacent_annotation_and_signature_pass(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Override
        public String toString() {
            return "demo";
        }
    }
    """

    assert run_checks([AnnotationGapCheck()], source) == []


def test_blank_line_before_signature_is_reported_at_signature(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Override

        public String toString() {
            return "demo";
        }
    }
    """

    violations = run_checks([AnnotationGapCheck()], source)

    assert [(v.line, v.column, v.key) for v in violations] == [(4, 5, EMPTY_LINES_BETWEEN_ANNOTATION)]
    assert violations[0].check == "annotation-gap"


def test_blank_line_between_annotations(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Deprecated

        @Override
        public String toString() {
            return "demo";
        }
    }
    """

    violations = run_checks([AnnotationGapCheck()], source)

    assert [(v.line, v.column) for v in violations] == [(4, 5)]


def test_each_gap_is_reported_once(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Deprecated

        @Override

        public String toString() {
            return "demo";
        }
    }
    """

    violations = run_checks([AnnotationGapCheck()], source)

    assert [v.line for v in violations] == [4, 6]


def test_comment_between_annotation_and_signature(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Override
        // explain
        public String toString() {
            return "demo";
        }
    }
    """

    violations = run_checks([AnnotationGapCheck()], source)

    assert [v.line for v in violations] == [3]


def test_signature_without_modifier_keywords(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Override

        String describe() {
            return "demo";
        }
    }
    """

    assert [v.line for v in run_checks([AnnotationGapCheck()], source)] == [4]


def test_multiline_annotation_is_measured_from_its_end(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @SuppressWarnings({
            "unchecked",
            "rawtypes"
        })
        public void run() {
        }
    }
    """

    assert run_checks([AnnotationGapCheck()], source) == []


def test_same_line_annotation_passes(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Override public String toString() {
            return "demo";
        }
    }
    """

    assert run_checks([AnnotationGapCheck()], source) == []


def test_constructor_is_checked(run_checks: CheckRunner) -> None:
    source = """
    class Demo {
        @Deprecated

        Demo() {
        }
    }
    """

    assert [v.line for v in run_checks([AnnotationGapCheck()], source)] == [4]


def test_declaration_without_annotations(parse_java: JavaParser) -> None:
    source = parse_java(
        """
        class Demo {
            public void run() {

            }
        }
        """
    )

    assert find_annotation_gaps(source.tree, find_method(source, "run")) == []


def test_signature_node_is_first_element_after_modifiers(parse_java: JavaParser) -> None:
    source = parse_java(
        """
        class Demo {
            @Override
            public String toString() { return ""; }
        }
        """
    )
    tree = source.tree

    signature = signature_node(tree, find_method(source, "toString"))

    assert signature is not None
    assert signature.text == "String"
    assert signature.line == 3
