"""Analyze command for Crypto Tracker CLI.

Sends a ticker to the Crypto Analysis Agent and prints its answer.
"""

import asyncio

import click
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from cryptotracker.cli.common import console, error_panel, get_config_or_exit
from cryptotracker.config import get_openai_settings


@click.command()
@click.argument("symbol", default="BTC")
@click.option("--stream", is_flag=True, help="Print the answer as it is generated.")
@click.option("--no-market", is_flag=True, help="Do not let the agent fetch live prices.")
def analyze(symbol: str, stream: bool, no_market: bool) -> None:
    """Ask the AI agent for a short analysis of a crypto token.
    
    SYMBOL is the ticker to analyze (default: BTC).
    
    \b
    Examples:
      cryptotracker analyze BTC
      cryptotracker analyze eth --stream
    """
    config = get_config_or_exit()
    
    api_key, _ = get_openai_settings(config)
    if not api_key:
        console.print(error_panel(
            "OpenAI API key not configured.\n\n"
            "[dim]Set OPENAI_API_KEY or add it to the [cyan]\\[openai][/cyan] table of "
            "your config file.[/dim]",
            title="Configuration Error",
        ))
        raise SystemExit(1)
    
    from cryptotracker.agents import AnalysisError, CryptoAnalysisAgent, normalize_symbol
    from cryptotracker.market import MarketService
    from cryptotracker.tools import set_market_service
    
    symbol = normalize_symbol(symbol)
    
    if not no_market:
        set_market_service(MarketService.from_config(config))
    
    agent = CryptoAnalysisAgent.from_config(config, use_market_tool=not no_market)
    
    console.print(f"[dim]Analyzing {symbol}...[/dim]\n")
    
    try:
        if stream:
            async def print_chunks() -> None:
                async for chunk in agent.stream(symbol):
                    console.print(chunk, end="", markup=False, highlight=False)
            
            asyncio.run(print_chunks())
            console.print()
        else:
            analysis = asyncio.run(agent.analyze(symbol))
            console.print(Panel(
                Markdown(analysis),
                title=f"[bold cyan]{symbol} Analysis[/bold cyan]",
                border_style="cyan",
            ))
    except AnalysisError as e:
        console.print(error_panel(escape(str(e)), title="Timeout"))
        raise SystemExit(1)
    except Exception as e:
        console.print(error_panel(f"Error running analysis: {escape(str(e))}"))
        raise SystemExit(1)
