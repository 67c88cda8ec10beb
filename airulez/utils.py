"""Shared utility functions for Agentic AI Rulez.

Provides the Rich console used for all operator-facing output, small
file-system helpers, and the interactive prompts used by the CLI.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt
from rich.table import Table

from airulez.detector.models import StackId

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> bool:
    """Create a directory (and parents) if it does not exist.

    Returns:
        ``True`` if the directory was created by this call.
    """
    dir_path = Path(path)
    if dir_path.is_dir():
        return False
    dir_path.mkdir(parents=True, exist_ok=True)
    return True


def make_executable(path: Path) -> None:
    """Set mode ``0o755`` on *path*."""
    path.chmod(
        stat.S_IRWXU
        | stat.S_IRGRP | stat.S_IXGRP
        | stat.S_IROTH | stat.S_IXOTH
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(message: str, style: str = "cyan") -> None:
    """Print a boxed section header."""
    console.print(Panel(f"[bold]{message}[/bold]", style=style))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_step(message: str) -> None:
    """Print a dimmed progress line."""
    console.print(f"  [dim]{message}[/dim]")


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def prompt_stack(choices: Sequence[StackId]) -> StackId:
    """Ask the operator to pick one of *choices* by number."""
    console.print("[bold]Which stack would you like to use?[/bold]")
    for index, stack in enumerate(choices, start=1):
        console.print(f"  {index}. {stack.label} [dim]({stack.value})[/dim]")
    picked = IntPrompt.ask(
        "Stack",
        choices=[str(i) for i in range(1, len(choices) + 1)],
        default=1,
        console=console,
    )
    return choices[picked - 1]


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question on the shared console."""
    return Confirm.ask(question, default=default, console=console)
