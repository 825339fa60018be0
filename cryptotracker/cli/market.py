"""Market commands for Crypto Tracker CLI.

Handles symbol resolution, quotes with scalping bands, candle tables
with SVG chart export, and a live refreshing market panel.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Group
from rich.panel import Panel
from rich.table import Table

from cryptotracker.cli.common import console, error_panel, get_config_or_exit
from cryptotracker.indicators import format_dollar, format_pct
from cryptotracker.market import MarketService, MarketView
from cryptotracker.models import MarketState


BAND_LABELS = [
    ("aggressive_buy", "Aggressive entry"),
    ("conservative_buy", "Conservative entry"),
    ("take_profit", "Take-profit zone"),
    ("hard_stop", "Hard stop"),
]


def _get_service() -> MarketService:
    """Build the market service from configuration."""
    return MarketService.from_config(get_config_or_exit())


def market_panel(state: MarketState) -> Panel:
    """Render a market state as a rich panel.

    Args:
        state: Market state to display.

    Returns:
        Panel with price, change, status notes and bands.
    """
    if state.status == "loading":
        return Panel(
            f"[dim]{state.message}[/dim]",
            title=f"[bold]{state.symbol} / USD[/bold]",
            border_style="dim",
        )

    if state.status in ("not_found", "unavailable"):
        return Panel(
            f"[yellow]{state.message}[/yellow]",
            title=f"[bold yellow]{state.symbol} / USD[/bold yellow]",
            border_style="yellow",
        )

    info = state.info
    change_color = "green" if info.change_24h >= 0 else "red"
    arrow = "▲" if info.change_24h >= 0 else "▼"

    summary = (
        f"[bold white]Price:[/bold white] {format_dollar(info.price)}\n"
        f"[bold white]Change:[/bold white] [{change_color}]{arrow} "
        f"{format_pct(info.change_24h)} 24h[/{change_color}]\n"
        f"[dim]{len(state.candles)} candles from {state.coin_id}[/dim]"
    )
    if state.status == "degraded":
        summary += f"\n[yellow]⚠ {state.message}[/yellow]"

    table = Table(
        title="Intraday scalping bands",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Level")
    table.add_column("Price", justify="right")

    bands = state.bands.model_dump() if state.bands else {}
    for key, label in BAND_LABELS:
        table.add_row(label, format_dollar(bands.get(key)))

    return Panel(
        Group(summary, table, "[dim]Simple percentage offsets, not trading advice.[/dim]"),
        title=f"[bold]{state.symbol} / USD[/bold]",
        border_style="cyan",
    )


@click.command()
@click.argument("symbol")
def resolve(symbol: str) -> None:
    """Resolve a ticker to its CoinGecko identifier.

    \b
    Examples:
      cryptotracker resolve BTC
      cryptotracker resolve pepe
    """
    service = _get_service()
    coin_id = asyncio.run(service.resolver.resolve(symbol))

    if coin_id is None:
        console.print(error_panel(
            f"Could not resolve symbol {symbol.strip().upper() or '(empty)'}.",
            title="Not Found",
        ))
        raise SystemExit(1)

    console.print(f"[bold]{symbol.strip().upper()}[/bold] → [cyan]{coin_id}[/cyan]")


@click.command()
@click.argument("symbol")
def quote(symbol: str) -> None:
    """Display price, 24h change and scalping bands for a symbol.

    \b
    Examples:
      cryptotracker quote BTC
      cryptotracker quote avax
    """
    service = _get_service()
    state = asyncio.run(service.load(symbol))
    console.print(market_panel(state))

    if state.status in ("not_found", "unavailable"):
        raise SystemExit(1)


@click.command()
@click.argument("symbol")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the candlestick chart to an SVG file.",
)
@click.option("--rows", default=20, type=int, help="Number of candles to list (default: 20)")
def chart(symbol: str, output: Optional[Path], rows: int) -> None:
    """Show intraday candles for a symbol and optionally export an SVG chart.

    \b
    Examples:
      cryptotracker chart BTC
      cryptotracker chart ETH -o eth.svg
    """
    from cryptotracker.chart import layout, render_svg
    from cryptotracker.config import get_chart_options

    config = get_config_or_exit()
    service = MarketService.from_config(config)
    state = asyncio.run(service.load(symbol))

    if not state.candles:
        console.print(market_panel(state))
        raise SystemExit(1)

    candles = state.candles
    table = Table(
        title=f"{state.symbol} / USD ({len(candles)} candles)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Time", style="dim")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right")

    for candle in candles[-rows:]:
        color = "green" if candle.bullish else "red"
        table.add_row(
            datetime.fromtimestamp(candle.time / 1000).strftime("%Y-%m-%d %H:%M"),
            format_dollar(candle.open),
            format_dollar(candle.high),
            format_dollar(candle.low),
            f"[{color}]{format_dollar(candle.close)}[/{color}]",
        )

    console.print(table)
    if len(candles) > rows:
        console.print(f"[dim]Showing last {rows} of {len(candles)} candles[/dim]")
    if state.status == "degraded":
        console.print(f"[yellow]⚠ {state.message}[/yellow]")

    if output:
        plan = layout(candles, **get_chart_options(config))
        output.write_text(render_svg(plan), encoding="utf-8")
        console.print(f"[green]✓[/green] Chart written to [cyan]{output}[/cyan]")


@click.command()
@click.argument("symbol")
@click.option(
    "-r", "--refresh",
    default=30,
    type=int,
    help="Refresh interval in seconds (default: 30)",
)
def live(symbol: str, refresh: int) -> None:
    """Watch the market panel for a symbol.

    Press Ctrl+C to stop watching.

    \b
    Examples:
      cryptotracker live BTC
      cryptotracker live ETH --refresh 60
    """
    from rich.live import Live

    view = MarketView(_get_service(), symbol)

    async def watch(display: Live) -> None:
        while True:
            await view.select(symbol)
            display.update(market_panel(view.state))
            await asyncio.sleep(refresh)

    console.print(f"[dim]Watching {symbol.strip().upper()}, refreshing every {refresh}s...[/dim]\n")

    try:
        with Live(market_panel(view.state), refresh_per_second=1, console=console) as display:
            asyncio.run(watch(display))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching.[/dim]")
