"""Unit tests for language and extension helpers."""

from pathlib import Path

import pytest

from diffscope.core.languages import (
    collect_source_files,
    detect_language_from_path,
    matches_extension,
    normalize_extensions,
    normalize_language,
)


@pytest.mark.parametrize("language", ["java", "JAVA", " jdk "])
def test_normalize_language(language: str) -> None:
    assert normalize_language(language) == "java"


def test_normalize_language_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unsupported language"):
        normalize_language("cobol")


def test_detect_language_from_path() -> None:
    assert detect_language_from_path(Path("src/Main.JAVA")) == "java"
    with pytest.raises(ValueError, match="Unsupported file extension"):
        detect_language_from_path(Path("build.gradle"))


def test_normalize_extensions() -> None:
    assert normalize_extensions(["java", ".kt", " ", " groovy "]) == (".java", ".kt", ".groovy")


def test_matches_extension() -> None:
    assert matches_extension("src/Main.java", (".java",))
    assert not matches_extension("src/Main.kt", (".java",))
    assert matches_extension("anything.txt", ())


def test_collect_source_files(tmp_path: Path) -> None:
    (tmp_path / "src" / "pkg").mkdir(parents=True)
    a = tmp_path / "src" / "A.java"
    b = tmp_path / "src" / "pkg" / "B.java"
    notes = tmp_path / "src" / "notes.md"
    for path in (a, b, notes):
        path.write_text("", encoding="utf-8")

    assert collect_source_files([tmp_path / "src"], (".java",)) == [a, b]
    assert collect_source_files([b, tmp_path / "src"], (".java",)) == [b, a]
    assert collect_source_files([notes], (".java",)) == []


def test_collect_source_files_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="File not found"):
        collect_source_files([tmp_path / "nope"], (".java",))
