from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

from diffscope.core.diff import DiffModel, FileChange, merge_changes, parse_unified_diff
from diffscope.core.ports.vcs import VersionControl
from diffscope.errors import ConfigurationError
from diffscope.models import SourceFile, SyntaxTree, Violation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Lazy(Generic[T]):
    """A value computed on first access, at most once, even when several threads ask at the same time.

    A factory failure is remembered too: later calls re-raise the first
    exception without running the factory again.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._ready = False
        self._value: T | None = None
        self._error: BaseException | None = None

    @classmethod
    def of(cls, value: T) -> Lazy[T]:
        lazy: Lazy[T] = cls(lambda: value)
        lazy._value = value
        lazy._ready = True
        return lazy

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def failed(self) -> bool:
        return self._error is not None

    def get(self) -> T:
        if not self._ready:
            with self._lock:
                if self._error is not None:
                    raise self._error
                if not self._ready:
                    try:
                        self._value = self._factory()
                    except Exception as exc:
                        self._error = exc
                        raise
                    self._ready = True
        return self._value  # type: ignore[return-value]


class RunContext:
    """State shared by every file and check of one execution.

    Holds the version-control adapter and the lazily acquired diff data. The
    fetch of remote refs and the diff acquisition each run at most once per
    context.
    """

    def __init__(
        self,
        vcs: VersionControl | None,
        main_branch: str = "main",
        diff_model: DiffModel | None = None,
        root: Path | None = None,
    ) -> None:
        self._vcs = vcs
        self.main_branch = main_branch
        self._root: Lazy[Path | None] = Lazy.of(root) if root is not None or vcs is None else Lazy(self._resolve_root)
        self._branch: Lazy[str] = Lazy(self._resolve_branch)
        self._fetched: Lazy[bool] = Lazy(self._fetch)
        self._diff: Lazy[DiffModel] = Lazy.of(diff_model) if diff_model is not None else Lazy(self._acquire_diff)
        self._allowlists: dict[tuple[str, ...], Lazy[list[str]]] = {}
        self._allowlists_lock = threading.Lock()

    @classmethod
    def from_git(cls, cwd: Path | None = None, main_branch: str = "main") -> RunContext:
        from diffscope.vcs.git import GitClient

        return cls(GitClient(cwd=cwd), main_branch=main_branch)

    @classmethod
    def from_changes(
        cls,
        changes: Iterable[FileChange],
        changed_paths: Sequence[str] | None = None,
        root: Path | None = None,
    ) -> RunContext:
        return cls(None, diff_model=DiffModel.from_changes(changes, changed_paths), root=root)

    @classmethod
    def from_unified_diff(cls, diff_text: str, root: Path | None = None) -> RunContext:
        changes = parse_unified_diff(diff_text)
        return cls(None, diff_model=DiffModel(changes=changes, changed_paths=tuple(changes)), root=root)

    @property
    def fetched(self) -> bool:
        return self._fetched.ready

    @property
    def diff_ready(self) -> bool:
        return self._diff.ready

    def _require_vcs(self) -> VersionControl:
        if self._vcs is None:
            raise ConfigurationError("Version control is not available for this run; supply the changes explicitly.")
        return self._vcs

    def _resolve_root(self) -> Path | None:
        return self._require_vcs().repo_root()

    def _resolve_branch(self) -> str:
        logger.info("Getting branch name...")
        branch = self._require_vcs().current_branch()
        logger.info("Current branch is %s", branch)
        return branch

    def _fetch(self) -> bool:
        self._require_vcs().fetch()
        return True

    def _acquire_diff(self) -> DiffModel:
        vcs = self._require_vcs()
        branch = self.current_branch()

        local_names = vcs.diff_names("HEAD")
        local_changes = parse_unified_diff(vcs.diff_unified("HEAD"))

        self.ensure_fetched()
        remote_ref = f"origin/{self.main_branch}...{branch}"
        logger.info("Getting diff between `origin/%s` and `%s` branches", self.main_branch, branch)
        remote_names = vcs.diff_names(remote_ref)
        remote_changes = parse_unified_diff(vcs.diff_unified(remote_ref))

        paths = list(dict.fromkeys(name for name in [*local_names, *remote_names] if name))
        model = DiffModel(changes=merge_changes(local_changes, remote_changes), changed_paths=tuple(paths))
        logger.info("Diff contains %d changed path(s)", len(paths))
        return model

    def repo_root(self) -> Path | None:
        return self._root.get()

    def current_branch(self) -> str:
        return self._branch.get()

    def ensure_fetched(self) -> None:
        self._fetched.get()

    def diff_model(self) -> DiffModel:
        return self._diff.get()

    def changes_for(self, path: str | Path) -> FileChange | None:
        model = self.diff_model()
        root = self.repo_root()
        candidate = Path(path)
        if root is not None:
            try:
                relative = candidate.resolve().relative_to(root.resolve())
            except (OSError, ValueError):
                pass
            else:
                change = model.changes.get(relative.as_posix())
                if change is not None:
                    return change
        return model.changes_for(candidate.as_posix())

    def changed_file_names(self, extensions: Sequence[str]) -> list[str]:
        key = tuple(extensions)
        with self._allowlists_lock:
            lazy = self._allowlists.get(key)
            if lazy is None:
                lazy = Lazy(lambda: self.diff_model().changed_file_names(key, self.repo_root()))
                self._allowlists[key] = lazy
        return lazy.get()


@dataclass
class FileContext:
    """Per-file state: the parsed source and the violations collected so far."""

    source: SourceFile
    run: RunContext
    violations: list[Violation] = field(default_factory=list)

    @property
    def tree(self) -> SyntaxTree:
        return self.source.tree

    @property
    def path(self) -> str:
        return self.source.path

    def log(self, line: int, column: int, key: str, *args: object, check: str = "") -> None:
        self.violations.append(Violation(self.source.path, line, column, key, tuple(args), check))
