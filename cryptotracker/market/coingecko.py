"""CoinGecko market-data source using aiohttp."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from cryptotracker.market.base import MarketDataError, MarketDataSource
from cryptotracker.models import Candle, CoinMatch


DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"

logger = logging.getLogger(__name__)


class CoinGeckoSource(MarketDataSource):
    """Market data from the CoinGecko public API.

    Each call opens its own client session; there is no retry and no
    timeout beyond the transport default unless one is given.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        vs_currency: str = "usd",
        timeout: Optional[float] = None,
    ):
        """Initialize the CoinGecko source.

        Args:
            base_url: API root, without trailing slash.
            api_key: Optional demo API key.
            vs_currency: Quote currency for prices.
            timeout: Optional total request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.vs_currency = vs_currency
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)

        kwargs: dict[str, Any] = {"params": params}
        if self.timeout:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(headers=self._headers()) as session:
                async with session.get(url, **kwargs) as resp:
                    if resp.status >= 400:
                        detail = await resp.text()
                        logger.warning("GET %s failed with HTTP %s", path, resp.status)
                        raise MarketDataError(f"HTTP {resp.status} from {path}: {detail[:200]}")
                    return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("GET %s failed: %s", path, e)
            raise MarketDataError(f"Request to {path} failed: {e}") from e

    async def search(self, query: str) -> list[CoinMatch]:
        payload = await self._get("/search", {"query": query})

        if not isinstance(payload, dict) or not isinstance(payload.get("coins", []), list):
            raise MarketDataError("Malformed search response")

        matches = []
        for item in payload.get("coins", []):
            if not isinstance(item, dict) or not item.get("id"):
                continue
            try:
                matches.append(CoinMatch(
                    id=str(item["id"]),
                    symbol=str(item.get("symbol") or ""),
                    name=item.get("name"),
                    market_cap_rank=item.get("market_cap_rank"),
                ))
            except ValidationError:
                logger.debug("Skipping malformed search entry: %s", item)
        return matches

    async def get_ohlc(self, coin_id: str, days: int) -> list[Candle]:
        payload = await self._get(
            f"/coins/{coin_id}/ohlc",
            {"vs_currency": self.vs_currency, "days": days},
        )

        if not isinstance(payload, list):
            raise MarketDataError("Malformed OHLC response")

        try:
            return [
                Candle(time=int(t), open=o, high=h, low=l, close=c)
                for t, o, h, l, c in payload
            ]
        except (TypeError, ValueError, ValidationError) as e:
            raise MarketDataError(f"Malformed OHLC row: {e}") from e

    async def get_price_series(self, coin_id: str, days: int) -> list[tuple[int, float]]:
        payload = await self._get(
            f"/coins/{coin_id}/market_chart",
            {"vs_currency": self.vs_currency, "days": days},
        )

        if not isinstance(payload, dict) or not isinstance(payload.get("prices", []), list):
            raise MarketDataError("Malformed market chart response")

        try:
            return [(int(t), float(p)) for t, p in payload.get("prices", [])]
        except (TypeError, ValueError) as e:
            raise MarketDataError(f"Malformed price point: {e}") from e
