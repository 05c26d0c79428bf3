from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from diffscope.checks import create_checks
from diffscope.cli._logging import configure_logging
from diffscope.config import DiffscopeConfig, load_config
from diffscope.core.context import RunContext
from diffscope.core.engine import check_files
from diffscope.core.languages import collect_source_files
from diffscope.errors import DiffscopeError
from diffscope.models import FileReport
from diffscope.report import format_jsonl, format_plain

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    plain = "plain"
    jsonl = "jsonl"


def _run_context(config: DiffscopeConfig, diff_file: Path | None) -> RunContext:
    if diff_file is not None:
        try:
            diff_text = diff_file.read_text(encoding="utf-8")
        except OSError as exc:
            message = f"Can't read diff file {diff_file}: {exc}"
            err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
            raise typer.Exit(2) from exc
        return RunContext.from_unified_diff(diff_text, root=Path.cwd())
    return RunContext.from_git(main_branch=config.missing_documentation.main_branch)


def _print_reports(reports: list[FileReport], output_format: OutputFormat) -> int:
    violations = [v for report in reports for v in report.violations]
    if output_format is OutputFormat.jsonl:
        if violations:
            typer.echo(format_jsonl(violations))
        return len(violations)

    for violation in violations:
        console.print(format_plain(violation), markup=False, highlight=False, soft_wrap=True)
    files_with_issues = sum(1 for report in reports if not report.ok)
    if violations:
        console.print(f"[red]Found {len(violations)} violation(s) in {files_with_issues} file(s)[/red]")
    else:
        console.print(f"[green]Checked {len(reports)} file(s), no violations[/green]")
    return len(violations)


def check(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to check.")],
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file (default: $DIFFSCOPE_CONFIG).")
    ] = None,
    main_branch: Annotated[str | None, typer.Option(help="Base branch to compare against.")] = None,
    changed_file: Annotated[
        list[str] | None, typer.Option("--changed-file", help="File name to treat as changed (repeatable).")
    ] = None,
    no_git: Annotated[bool, typer.Option("--no-git", help="Do not derive changed files from git.")] = False,
    diff_file: Annotated[
        Path | None, typer.Option(help="Read line changes from a unified diff file instead of git.")
    ] = None,
    output_format: Annotated[OutputFormat, typer.Option("--format", help="Output format.")] = OutputFormat.plain,
    jobs: Annotated[int | None, typer.Option(help="Number of files checked in parallel.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Check Java sources and report violations."""
    configure_logging(verbose)
    try:
        config = load_config(
            config_file,
            enabledGit=False if no_git else None,
            changedFileSet=list(changed_file) if changed_file else None,
            mainBranch=main_branch,
        )
        files = collect_source_files(paths, config.missing_documentation.file_extensions)
        run = _run_context(config, diff_file)
        reports = check_files(files, create_checks(config), run, jobs=jobs or config.jobs)
    except (DiffscopeError, FileNotFoundError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(2) from exc

    if _print_reports(reports, output_format):
        raise typer.Exit(1)
