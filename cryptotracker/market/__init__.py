"""Market data: provider adapters, symbol resolution and snapshots."""

from cryptotracker.market.base import MarketDataError, MarketDataSource
from cryptotracker.market.coingecko import CoinGeckoSource
from cryptotracker.market.resolver import DEFAULT_SYMBOL_MAP, SymbolResolver
from cryptotracker.market.snapshot import MarketService, SnapshotBuilder
from cryptotracker.market.view import MarketView

__all__ = [
    "MarketDataError",
    "MarketDataSource",
    "CoinGeckoSource",
    "DEFAULT_SYMBOL_MAP",
    "SymbolResolver",
    "SnapshotBuilder",
    "MarketService",
    "MarketView",
]
