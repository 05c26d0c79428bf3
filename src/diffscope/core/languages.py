from collections.abc import Iterable, Sequence
from pathlib import Path

_LANGUAGE_ALIASES = {
    "java": "java",
    "jdk": "java",
}

_EXTENSION_LANGUAGE_MAP = {
    ".java": "java",
}

_SUPPORTED_LANGUAGES = set(_EXTENSION_LANGUAGE_MAP.values())

DEFAULT_EXTENSIONS: tuple[str, ...] = (".java",)


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    """Return extensions with a leading dot, e.g. ``java`` becomes ``.java``."""
    normalized: list[str] = []
    for extension in extensions:
        stripped = extension.strip()
        if not stripped:
            continue
        normalized.append(stripped if stripped.startswith(".") else f".{stripped}")
    return tuple(normalized)


def matches_extension(path: str | Path, extensions: Sequence[str]) -> bool:
    if not extensions:
        return True
    name = Path(path).name
    return any(name.endswith(extension) for extension in extensions)


def collect_source_files(paths: Iterable[str | Path], extensions: Sequence[str]) -> list[Path]:
    """Expand directories into the source files below them, keeping input order."""
    collected: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(p for p in path.rglob("*") if p.is_file() and matches_extension(p, extensions))
        elif path.is_file():
            candidates = [path] if matches_extension(path, extensions) else []
        else:
            raise FileNotFoundError(f"File not found: {raw}")
        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                collected.append(candidate)
    return collected
