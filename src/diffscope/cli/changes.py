from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from diffscope.cli._logging import configure_logging
from diffscope.core.context import RunContext
from diffscope.core.diff import FileChange
from diffscope.errors import DiffscopeError

console = Console()


def _format_lines(lines: Iterable[int], limit: int = 12) -> str:
    # Stored indices are 0-based, people read 1-based line numbers.
    shown = sorted(lines)
    text = ", ".join(str(n + 1) for n in shown[:limit])
    if len(shown) > limit:
        text += f", ... (+{len(shown) - limit})"
    return text or "-"


def _render_changes(paths: Iterable[str], changes: dict[str, FileChange]) -> None:
    table = Table(show_lines=False)
    for header in ("path", "added", "deleted"):
        table.add_column(header)
    rows = 0
    for path in paths:
        change = changes.get(path)
        added = _format_lines(change.added_lines) if change else "-"
        deleted = _format_lines(change.deleted_lines) if change else "-"
        table.add_row(path, added, deleted)
        rows += 1
    console.print(table)
    console.print(f"({rows} files)")


def changes(
    main_branch: Annotated[str, typer.Option(help="Base branch to compare against.")] = "main",
    repo: Annotated[Path | None, typer.Option(help="Repository directory (default: current directory).")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Show the files and lines changed against the base branch."""
    configure_logging(verbose)
    run = RunContext.from_git(cwd=repo, main_branch=main_branch)
    try:
        branch = run.current_branch()
        root = run.repo_root()
        model = run.diff_model()
    except DiffscopeError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(2) from exc

    console.print(f"Repository: [bold]{root}[/bold]")
    console.print(f"Branch: [bold]{branch}[/bold] (against origin/{main_branch})")
    _render_changes(dict.fromkeys([*model.changed_paths, *model.changes]), dict(model.changes))
