"""
Rendering functions for repomanifest output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from typing import Callable, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .domain import Category, Repository
from .errors import ValidationError
from .services import SyncOutcome, SyncResult

console = Console()
err_console = Console(stderr=True)

OUTCOME_STYLES = {
    SyncOutcome.SYNCED: "green",
    SyncOutcome.SKIPPED: "yellow",
    SyncOutcome.FAILED: "red",
}


def render_workspace_table(
    repos: List[Repository],
    exists: Callable[[Repository], bool],
    title: Optional[str] = None,
    out: Optional[Console] = None,
) -> None:
    """
    Render repositories as a table.

    Args:
        repos: Repositories to show
        exists: Tells whether a repository's workspace is on disk
        title: Optional table title
    """
    out = out or console
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Status", style="yellow")
    table.add_column("Path", style="dim")
    table.add_column("Exists", justify="center")

    for repo in repos:
        table.add_row(
            escape(repo.name),
            repo.category.value,
            repo.status.value,
            repo.workspace,
            "[green]✓[/green]" if exists(repo) else "[red]✗[/red]",
        )

    out.print(table)


def render_workspaces(
    groups: Dict[Category, List[Repository]],
    summary: Dict[str, int],
    exists: Callable[[Repository], bool],
    out: Optional[Console] = None,
) -> None:
    """Render one table per category followed by the status summary."""
    out = out or console
    total = sum(len(repos) for repos in groups.values())
    out.print(f"[bold]Workspaces[/bold] ({total} total)")

    if not groups:
        out.print("[yellow]No repositories found.[/yellow]")

    for category, repos in groups.items():
        render_workspace_table(
            repos,
            exists,
            title=f"{category.value.upper()} ({len(repos)})",
            out=out,
        )

    out.print("Summary:")
    for status, count in summary.items():
        out.print(f"  {status.capitalize()}: {count}")


def render_violations(error: ValidationError, out: Optional[Console] = None) -> None:
    """Render every schema violation as a table on stderr."""
    out = out or err_console
    table = Table(
        title=f"Invalid {error.subject}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold red"
    )
    table.add_column("Location", style="cyan")
    table.add_column("Problem")
    for violation in error.violations:
        table.add_row(escape(violation.location), escape(violation.message))
    out.print(table)


def render_sync_results(results: Iterable[SyncResult], out: Optional[Console] = None) -> None:
    """Render one line per repository sync outcome."""
    out = out or console
    for result in results:
        style = OUTCOME_STYLES[result.outcome]
        line = f"[{style}]{result.outcome.value:<8}[/{style}] {escape(result.name)}"
        if result.message and result.outcome is not SyncOutcome.SYNCED:
            line += f" ({escape(result.message)})"
        out.print(line, highlight=False)
