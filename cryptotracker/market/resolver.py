"""Ticker to coin identifier resolution."""

import logging
from typing import Optional

from cryptotracker.market.base import MarketDataError, MarketDataSource


DEFAULT_SYMBOL_MAP = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "AVAX": "avalanche-2",
}

logger = logging.getLogger(__name__)


class SymbolResolver:
    """Maps free-text tickers to provider coin identifiers.

    Known tickers come from a static table without a network call;
    anything else goes through the provider search. Resolution is best
    effort: every failure is reported as not found (None).
    """

    def __init__(
        self,
        source: MarketDataSource,
        symbol_map: Optional[dict[str, str]] = None,
    ):
        self.source = source
        mapping = DEFAULT_SYMBOL_MAP if symbol_map is None else symbol_map
        self.symbol_map = {key.upper(): value for key, value in mapping.items()}

    async def resolve(self, symbol: str) -> Optional[str]:
        """Resolve a ticker to a coin identifier.

        Args:
            symbol: Ticker text, any case, surrounding whitespace ignored.

        Returns:
            Coin identifier, or None if the symbol could not be resolved.
        """
        query = (symbol or "").strip()
        if not query:
            return None

        mapped = self.symbol_map.get(query.upper())
        if mapped:
            return mapped

        try:
            matches = await self.source.search(query)
        except MarketDataError as e:
            logger.warning("Symbol search for %s failed: %s", query, e)
            return None

        if not matches:
            logger.debug("No search results for %s", query)
            return None

        for match in matches:
            if match.symbol == query:
                return match.id

        wanted = query.lower()
        for match in matches:
            if match.symbol.lower() == wanted:
                return match.id

        logger.debug("No exact symbol match for %s, using %s", query, matches[0].id)
        return matches[0].id
