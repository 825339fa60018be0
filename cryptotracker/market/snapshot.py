"""Market snapshot building.

Fetches OHLC candles for a coin, falling back to a price-only series
when the OHLC endpoint has nothing, and wraps the result with its price
summary. Everything here is best effort: data problems become display
states, never exceptions.
"""

import logging
from typing import Any, Optional

from cryptotracker.config import get_band_factors, get_symbol_map
from cryptotracker.indicators.bands import DEFAULT_BAND_FACTORS, calculate_bands
from cryptotracker.market.base import MarketDataError, MarketDataSource
from cryptotracker.market.coingecko import DEFAULT_BASE_URL, CoinGeckoSource
from cryptotracker.market.resolver import SymbolResolver
from cryptotracker.models import (
    BandFactors,
    Candle,
    MarketSnapshot,
    MarketState,
    PriceInfo,
)


logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """Builds a MarketSnapshot for a resolved coin identifier."""

    def __init__(
        self,
        source: MarketDataSource,
        ohlc_days: int = 1,
        fallback_days: int = 2,
        fallback_points: int = 48,
    ):
        """Initialize the builder.

        Args:
            source: Market-data source to fetch from.
            ohlc_days: OHLC window in days.
            fallback_days: Price series window in days for the fallback.
            fallback_points: Number of most recent points kept by the fallback.
        """
        self.source = source
        self.ohlc_days = ohlc_days
        self.fallback_days = fallback_days
        self.fallback_points = fallback_points

    async def _fallback_candles(self, coin_id: str) -> list[Candle]:
        points = await self.source.get_price_series(coin_id, self.fallback_days)
        recent = points[-self.fallback_points:] if self.fallback_points > 0 else []
        return [Candle.flat(time, price) for time, price in recent]

    async def build(self, coin_id: str) -> Optional[MarketSnapshot]:
        """Fetch candles and derive the price summary.

        Args:
            coin_id: Provider coin identifier.

        Returns:
            MarketSnapshot, or None if no market data could be obtained.
        """
        degraded = False
        try:
            candles = await self.source.get_ohlc(coin_id, self.ohlc_days)
            if not candles:
                logger.warning("Empty OHLC for %s, falling back to price series", coin_id)
                candles = await self._fallback_candles(coin_id)
                degraded = True
        except (MarketDataError, ValueError) as e:
            logger.warning("Market data for %s unavailable: %s", coin_id, e)
            return None

        if not candles:
            logger.warning("No market data points for %s", coin_id)
            return None

        return MarketSnapshot(
            coin_id=coin_id,
            candles=candles,
            info=PriceInfo.from_candles(candles),
            degraded=degraded,
        )


class MarketService:
    """Resolves a ticker and builds its market state in one call."""

    def __init__(
        self,
        resolver: SymbolResolver,
        builder: SnapshotBuilder,
        band_factors: BandFactors = DEFAULT_BAND_FACTORS,
    ):
        self.resolver = resolver
        self.builder = builder
        self.band_factors = band_factors

    @classmethod
    def from_source(
        cls,
        source: MarketDataSource,
        symbol_map: Optional[dict[str, str]] = None,
        band_factors: BandFactors = DEFAULT_BAND_FACTORS,
        **builder_options: int,
    ) -> "MarketService":
        """Create a service with a resolver and builder sharing one source."""
        return cls(
            resolver=SymbolResolver(source, symbol_map),
            builder=SnapshotBuilder(source, **builder_options),
            band_factors=band_factors,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "MarketService":
        """Create a CoinGecko-backed service from a loaded configuration."""
        market = config.get("market", {})
        source = CoinGeckoSource(
            base_url=market.get("base_url", DEFAULT_BASE_URL),
            api_key=market.get("api_key") or None,
            vs_currency=market.get("vs_currency", "usd"),
            timeout=market.get("timeout_seconds") or None,
        )
        return cls.from_source(
            source,
            symbol_map=get_symbol_map(config),
            band_factors=get_band_factors(config),
            ohlc_days=int(market.get("ohlc_days", 1)),
            fallback_days=int(market.get("fallback_days", 2)),
            fallback_points=int(market.get("fallback_points", 48)),
        )

    async def load(self, symbol: str) -> MarketState:
        """Load the market state for a ticker.

        Args:
            symbol: Ticker text as typed by the user.

        Returns:
            MarketState with status ok, degraded, not_found or unavailable.
        """
        display_symbol = (symbol or "").strip().upper()

        coin_id = await self.resolver.resolve(display_symbol)
        if coin_id is None:
            return MarketState.not_found(display_symbol)

        snapshot = await self.builder.build(coin_id)
        if snapshot is None:
            return MarketState.unavailable(display_symbol, coin_id)

        bands = calculate_bands(snapshot.info.price, self.band_factors)
        return MarketState.from_snapshot(display_symbol, snapshot, bands)
