"""Configuration commands for Crypto Tracker CLI."""

import click
from rich.panel import Panel

from cryptotracker.cli.common import console
from cryptotracker.config import create_template_config, get_config_path


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template configuration file.
    
    The file is written to ~/.config/cryptotracker/config.toml unless
    CRYPTOTRACKER_CONFIG points elsewhere.
    """
    config_path = get_config_path()
    
    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Configuration already exists at:[/yellow]\n"
            f"[cyan]{config_path}[/cyan]\n\n"
            "[dim]Use [cyan]--force[/cyan] to overwrite it.[/dim]",
            title="[bold yellow]Nothing To Do[/bold yellow]",
            border_style="yellow",
        ))
        return
    
    create_template_config(config_path)
    console.print(Panel(
        f"[green]✓[/green] Configuration file created at:\n"
        f"[cyan]{config_path}[/cyan]\n\n"
        "[dim]Add your OpenAI API key (or set OPENAI_API_KEY) to use "
        "[cyan]cryptotracker analyze[/cyan].[/dim]",
        title="[bold green]Configuration Created[/bold green]",
        border_style="green",
    ))
