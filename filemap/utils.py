"""
Utility functions for filemap.

Includes:
- Logging setup (rich)
- Console output helpers
- JSON report saving
"""

import json
import logging
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console()

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def setup_logging(verbosity: int = 0) -> None:
    """
    Configure root logging through rich.

    Args:
        verbosity: Number of -v flags. 0 shows warnings and errors only,
            1 adds info, 2 adds debug, 3 or more adds trace.
    """
    level = VERBOSITY_LEVELS.get(verbosity, TRACE)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))


def print_plan_table(actions: list, limit: int = 10):
    """Print the planned actions, showing at most `limit` rows."""
    if not actions:
        console.print("[dim]No files matched any rule.[/dim]")
        return

    table = Table(title=f"Planned Actions ({len(actions)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Source", style="yellow")
    table.add_column("Destination", style="blue")

    for i, action in enumerate(actions[:limit], start=1):
        table.add_row(str(i), action.kind.label, escape(str(action.source_path)), escape(str(action.dest_path)))

    console.print(table)
    if len(actions) > limit:
        console.print(f"[italic]... and {len(actions) - limit} more[/italic]")


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {escape(msg)}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}")


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    console.print(f"[INFO] Saved: {path}", markup=False)
