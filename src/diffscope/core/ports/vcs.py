from pathlib import Path
from typing import Protocol


class VersionControl(Protocol):
    def repo_root(self) -> Path: ...

    def current_branch(self) -> str: ...

    def fetch(self) -> None: ...

    def diff_names(self, ref: str) -> list[str]: ...

    def diff_unified(self, ref: str) -> str: ...
