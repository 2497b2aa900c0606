"""Rich terminal output for crunchwrap commands.

Banners, stage warnings, failure banners, the generation spinner and
the icon conversion progress bar. Spinner and progress bar are only
shown when the console is a terminal.
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import TYPE_CHECKING, ContextManager

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
)

if TYPE_CHECKING:
    from crunchwrap.execution.stages import StageResult
    from crunchwrap.images.pipeline import IconReport

console = Console()

BANNER = r"""
  _____                       _
 / ____|                     | |
| |     _ __ _   _ _ __   ___| |____      ___ __ __ _ _ __
| |    | '__| | | | '_ \ / __| '_ \ \ /\ / / '__/ _` | '_ \
| |____| |  | |_| | | | | (__| | | \ V  V /| | | (_| | |_) |
 \_____|_|   \__,_|_| |_|\___|_| |_|\_/\_/ |_|  \__,_| .__/
                                                     | |
                                                     |_|
"""


def print_banner(tagline: str, style: str = "magenta") -> None:
    console.print(BANNER, style=f"bold {style}", highlight=False)
    console.print(f"  {escape(tagline)}\n", style="bold cyan")


def print_warning(message: str) -> None:
    """Print a yellow warning; continuation lines are indented under it."""
    first, _, rest = message.partition("\n")
    console.print(f"[yellow]⚠  {escape(first)}[/yellow]")
    for line in rest.splitlines():
        console.print(f"   {escape(line)}", highlight=False)


def print_failure(title: str, detail: str | None = None) -> None:
    console.print(f"\n[bold red]💥 {escape(title)}[/bold red]")
    if detail:
        console.print(f"[red]{escape(detail.strip())}[/red]")


def print_stage_result(name: str, result: StageResult) -> None:
    """Report a finished stage: warnings and OK notes; fatal ones are left to the caller."""
    from crunchwrap.execution.stages import Outcome

    if result.outcome is Outcome.WARN and result.diagnostic:
        print_warning(result.diagnostic)
    elif result.outcome is Outcome.OK and result.diagnostic:
        console.print(f"[green]✓[/green] {escape(result.diagnostic)}")


def status(text: str) -> ContextManager:
    """Spinner while a blocking step runs; a no-op off-terminal."""
    if not console.is_terminal:
        return nullcontext()
    return console.status(text, spinner="dots")


def create_icon_progress() -> Progress | None:
    """Create a Rich Progress bar for icon conversion.

    Returns None if the console is not a terminal (CI/pipe mode),
    so the caller can skip progress display.
    """
    if not console.is_terminal:
        return None

    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )


def render_icon_report(report: IconReport) -> None:
    for spec, code in report.failures:
        print_warning(f"Failed to convert logo to {spec.relative_path} (exit code {code})")
    if report.generated:
        console.print(
            f"[green]✓[/green] Generated {len(report.generated)}/{report.total} icons"
        )
