"""Shared helpers for CLI commands."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cryptotracker.config import ConfigError, load_config

# Console for rich output
console = Console()


def error_panel(message: str, title: str = "Error") -> Panel:
    """Build a red error panel."""
    return Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    )


def get_config_or_exit() -> dict[str, Any]:
    """Load configuration, exiting with an error panel if it is malformed."""
    try:
        return load_config()
    except ConfigError as e:
        console.print(error_panel(
            f"{escape(str(e))}\n\n[dim]Fix the file or run [cyan]cryptotracker init --force[/cyan].[/dim]",
            title="Configuration Error",
        ))
        raise SystemExit(1)
