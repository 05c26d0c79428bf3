"""Message catalogue for violation keys."""

from collections.abc import Sequence

EMPTY_LINES_BETWEEN_ANNOTATION = "methodEmptyLines.emptyLinesBetweenAnnotation"
EMPTY_LINES_AT_THE_END = "methodEmptyLines.emptyLinesNotAllowedInTheEnd"
INTERMEDIATE_EMPTY_LINES = "methodEmptyLines.intermediateEmptyLinesCheck"
JAVADOC_MISSING = "javadoc.missing"
JAVADOC_MISSED_ON_LONG_METHOD = "methodJavaDoc.javaDocMissedOnMethods"

MESSAGES: dict[str, str] = {
    EMPTY_LINES_BETWEEN_ANNOTATION: (
        "Empty lines or comments are not allowed between annotations and the declaration signature."
    ),
    EMPTY_LINES_AT_THE_END: "Empty lines are not allowed at the start or the end of a method body.",
    INTERMEDIATE_EMPTY_LINES: "More than one consecutive empty line inside a declaration.",
    JAVADOC_MISSING: (
        "You are missing a JavaDoc comment in a project. Please provide information about the purpose "
        "and functionality of the method. The more detailed the information you provide, the more "
        "helpful it will be for your colleagues."
    ),
    JAVADOC_MISSED_ON_LONG_METHOD: "No JavaDoc for method where length more then {1}. Current size is {0}",
}


def render_message(key: str, args: Sequence[object] = ()) -> str:
    template = MESSAGES.get(key)
    if template is None:
        return key
    return template.format(*args)
