"""Base market-data source interface for Crypto Tracker."""

from abc import ABC, abstractmethod

from cryptotracker.models import Candle, CoinMatch


class MarketDataError(Exception):
    """Raised by a market-data source when a request cannot be served.

    Covers transport failures, non-success HTTP statuses and malformed
    response bodies alike.
    """


class MarketDataSource(ABC):
    """Abstract base class for market-data providers.

    Implementations translate provider response shapes into the
    provider-agnostic models and raise MarketDataError on any failure.
    """

    @abstractmethod
    async def search(self, query: str) -> list[CoinMatch]:
        """Search coins by free text.

        Args:
            query: Ticker or name to search for.

        Returns:
            Matching coins in provider order.

        Raises:
            MarketDataError: If the search fails.
        """
        pass

    @abstractmethod
    async def get_ohlc(self, coin_id: str, days: int) -> list[Candle]:
        """Get OHLC candles for a coin.

        Args:
            coin_id: Provider coin identifier.
            days: Window length in days.

        Returns:
            Candles in chronological order (may be empty).

        Raises:
            MarketDataError: If the request fails.
        """
        pass

    @abstractmethod
    async def get_price_series(self, coin_id: str, days: int) -> list[tuple[int, float]]:
        """Get a price-only time series for a coin.

        Args:
            coin_id: Provider coin identifier.
            days: Window length in days.

        Returns:
            ``(time_ms, price)`` points in chronological order (may be empty).

        Raises:
            MarketDataError: If the request fails.
        """
        pass
