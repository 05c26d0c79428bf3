from collections.abc import Sequence


class DiffscopeError(Exception):
    """Base class for errors that abort a diffscope run."""


class ConfigurationError(DiffscopeError):
    """Invalid or missing configuration, raised before any file is processed."""


class DiffAcquisitionError(DiffscopeError):
    """A version-control invocation failed."""

    def __init__(self, command: Sequence[str], detail: str) -> None:
        self.command = tuple(command)
        self.detail = detail
        super().__init__(f"Command {' '.join(self.command)!r} failed: {detail}")


class TreeShapeError(DiffscopeError):
    """An expected structural element is missing from a syntax tree."""


class NodeNotFoundError(TreeShapeError, LookupError):
    pass
