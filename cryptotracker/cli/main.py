"""Main CLI entry point for Crypto Tracker.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

import importlib

import click

from cryptotracker.log import setup_logging


class LazyGroup(click.Group):
    """A click Group that imports command modules only when invoked."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        base = super().list_commands(ctx)
        return sorted(set(base) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    "init": "cryptotracker.cli.config",
    "resolve": "cryptotracker.cli.market",
    "quote": "cryptotracker.cli.market",
    "chart": "cryptotracker.cli.market",
    "live": "cryptotracker.cli.market",
    "analyze": "cryptotracker.cli.analyze",
    "serve": "cryptotracker.cli.serve",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(package_name="cryptotracker")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Crypto Tracker - live crypto charts, scalping bands and AI analysis.
    
    \b
    Quick Start:
      cryptotracker quote BTC      # Price, 24h change and bands
      cryptotracker analyze ETH    # Ask the AI agent about a token
      cryptotracker serve          # Run the web dashboard
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
