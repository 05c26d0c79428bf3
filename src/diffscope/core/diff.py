from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from diffscope.core.languages import matches_extension

logger = logging.getLogger(__name__)

_HUNK_RE = re.compile(r"@@ -(?P<old>\d+)(?:,(?P<old_count>\d+))? \+(?P<new>\d+)(?:,(?P<new_count>\d+))? @@")


@dataclass(frozen=True)
class FileChange:
    """Added and deleted line numbers of one file.

    Line numbers are 0-based, as the diff source reports them. Use
    :meth:`touches` to correlate them with 1-based source positions.
    """

    path: str
    added_lines: frozenset[int] = frozenset()
    deleted_lines: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "added_lines", frozenset(self.added_lines))
        object.__setattr__(self, "deleted_lines", frozenset(self.deleted_lines))
        if any(n < 0 for n in self.added_lines) or any(n < 0 for n in self.deleted_lines):
            raise ValueError(f"Line numbers must be non-negative for {self.path}")

    def touches(self, first_line: int, last_line: int, *, include_deleted: bool = True) -> bool:
        """True if any changed line falls into the 1-based inclusive range."""
        lines = self.added_lines | self.deleted_lines if include_deleted else self.added_lines
        return any(first_line <= n + 1 <= last_line for n in lines)

    def union(self, other: FileChange) -> FileChange:
        return FileChange(
            path=self.path,
            added_lines=self.added_lines | other.added_lines,
            deleted_lines=self.deleted_lines | other.deleted_lines,
        )


def _strip_prefix(token: str) -> str | None:
    token = token.strip()
    if token == "/dev/null":
        return None
    if token.startswith(("a/", "b/")):
        return token[2:]
    return token


def parse_unified_diff(diff_text: str) -> dict[str, FileChange]:
    """Parse zero-context unified diff output into per-file changes.

    For a hunk header ``@@ -a,b +c,d @@`` the deleted lines are ``a-1 ..
    a-1+b-1`` and the added lines ``c-1 .. c-1+d-1``, all 0-based.

    The body of each hunk is consumed by the counts of its header, so content
    lines such as ``--- x`` or ``+++ y`` are never taken for file headers.
    """
    added: dict[str, set[int]] = {}
    deleted: dict[str, set[int]] = {}
    old_path: str | None = None
    current_path: str | None = None
    old_left = new_left = 0
    for raw_line in diff_text.split("\n"):
        if old_left > 0 or new_left > 0:
            marker = raw_line[:1]
            if marker in ("-", " "):
                old_left -= 1
            if marker in ("+", " "):
                new_left -= 1
            if marker in ("-", "+", " ", "\\"):
                continue
            logger.debug("Hunk body ended early at %r", raw_line)
            old_left = new_left = 0
        if raw_line.startswith("--- "):
            old_path = _strip_prefix(raw_line[4:])
            continue
        if raw_line.startswith("+++ "):
            current_path = _strip_prefix(raw_line[4:]) or old_path
            if current_path is not None:
                added.setdefault(current_path, set())
                deleted.setdefault(current_path, set())
            continue
        if current_path is None:
            continue
        match = _HUNK_RE.match(raw_line)
        if match is None:
            continue
        old_start = int(match.group("old"))
        old_count = int(match.group("old_count") or "1")
        new_start = int(match.group("new"))
        new_count = int(match.group("new_count") or "1")
        deleted[current_path].update(old_start - 1 + offset for offset in range(old_count))
        added[current_path].update(new_start - 1 + offset for offset in range(new_count))
        old_left, new_left = old_count, new_count

    return {
        path: FileChange(path=path, added_lines=frozenset(added[path]), deleted_lines=frozenset(deleted[path]))
        for path in added
    }


def merge_changes(*change_maps: Mapping[str, FileChange]) -> dict[str, FileChange]:
    merged: dict[str, FileChange] = {}
    for change_map in change_maps:
        for path, change in change_map.items():
            existing = merged.get(path)
            merged[path] = change if existing is None else existing.union(change)
    return merged


@dataclass(frozen=True)
class DiffModel:
    """Changed files of one run and their per-file line changes."""

    changes: Mapping[str, FileChange] = field(default_factory=dict)
    changed_paths: tuple[str, ...] = ()

    @classmethod
    def from_changes(cls, changes: Iterable[FileChange], changed_paths: Sequence[str] | None = None) -> DiffModel:
        by_path = merge_changes(*({c.path: c} for c in changes))
        paths = tuple(changed_paths) if changed_paths is not None else tuple(sorted(by_path))
        return cls(changes=by_path, changed_paths=paths)

    def changes_for(self, path: str | Path) -> FileChange | None:
        """Find the change for ``path``.

        An exact relative path wins; otherwise the changed path must end with
        the same trailing path components. Ambiguous suffix matches yield
        ``None``.
        """
        wanted = PurePosixPath(str(path).replace("\\", "/"))
        exact = self.changes.get(str(wanted))
        if exact is not None:
            return exact

        candidates = [
            change
            for changed, change in self.changes.items()
            if _shares_suffix(PurePosixPath(changed), wanted)
        ]
        if len(candidates) == 1:
            return candidates[0]
        if len(candidates) > 1:
            logger.debug("Ambiguous change lookup for %s: %d candidates", path, len(candidates))
        return None

    def changed_file_names(self, extensions: Sequence[str], root: Path | None = None) -> list[str]:
        """Names of changed files that exist on disk and match one of ``extensions``."""
        names: set[str] = set()
        for raw in self.changed_paths:
            if not raw.strip():
                continue
            candidate = (root / raw) if root is not None else Path(raw)
            if not candidate.exists():
                continue
            if matches_extension(candidate, extensions):
                names.add(candidate.name)
        logger.info("%d changed file(s) selected for checking", len(names))
        for name in sorted(names):
            logger.debug("  %s", name)
        return sorted(names)


def _shares_suffix(changed: PurePosixPath, wanted: PurePosixPath) -> bool:
    changed_parts = changed.parts
    wanted_parts = [p for p in wanted.parts if p not in ("/", ".")]
    if not changed_parts or not wanted_parts:
        return False
    size = min(len(changed_parts), len(wanted_parts))
    return changed_parts[-size:] == tuple(wanted_parts[-size:])
