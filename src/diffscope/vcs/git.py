import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from diffscope.errors import DiffAcquisitionError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 60.0
QUERY_TIMEOUT_SECONDS = 20.0


def _decode(output: str | bytes | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


@dataclass(frozen=True)
class GitClient:
    """Thin wrapper around the ``git`` binary.

    Every invocation that exits non-zero raises :class:`DiffAcquisitionError`.
    A timeout is not an error: whatever was written to stdout until then is
    returned.
    """

    cwd: Path | None = None
    executable: str = "git"
    query_timeout: float = QUERY_TIMEOUT_SECONDS
    fetch_timeout: float = FETCH_TIMEOUT_SECONDS

    def run(self, args: Sequence[str], timeout: float | None = None) -> str:
        command = [self.executable, *args]
        limit = self.query_timeout if timeout is None else timeout
        logger.debug("Running %s (timeout %.0fs)", " ".join(command), limit)
        try:
            result = subprocess.run(
                command,
                cwd=str(self.cwd) if self.cwd else None,
                check=False,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=limit,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("%s timed out after %.0fs, using partial output", " ".join(command), limit)
            return _decode(exc.stdout)
        except OSError as exc:
            raise DiffAcquisitionError(command, str(exc)) from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise DiffAcquisitionError(command, detail)
        return result.stdout

    def run_lines(self, args: Sequence[str], timeout: float | None = None) -> list[str]:
        output = self.run(args, timeout)
        return [line for line in output.split("\n") if line.strip()]

    def repo_root(self) -> Path:
        lines = self.run_lines(["rev-parse", "--show-toplevel"])
        if not lines:
            raise DiffAcquisitionError([self.executable, "rev-parse", "--show-toplevel"], "no output")
        return Path(lines[0].strip())

    def current_branch(self) -> str:
        lines = self.run_lines(["rev-parse", "--abbrev-ref", "HEAD"])
        if not lines:
            raise DiffAcquisitionError([self.executable, "rev-parse", "--abbrev-ref", "HEAD"], "no output")
        return lines[0].strip()

    def fetch(self) -> None:
        logger.info("Fetching changes...")
        self.run(["fetch"], timeout=self.fetch_timeout)

    def diff_names(self, ref: str) -> list[str]:
        return [line.strip() for line in self.run_lines(["diff", "--name-only", ref])]

    def diff_unified(self, ref: str) -> str:
        return self.run(["diff", "--unified=0", "--no-color", "--no-ext-diff", ref])
