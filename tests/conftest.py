"""Shared fixtures and fakes for Crypto Tracker tests."""

import asyncio
from typing import Optional

import pytest

from cryptotracker.market import MarketDataError, MarketDataSource
from cryptotracker.models import Candle, CoinMatch


def make_candles(rows: list[tuple]) -> list[Candle]:
    """Build candles from ``(time, open, high, low, close)`` rows."""
    return [Candle(time=t, open=o, high=h, low=l, close=c) for t, o, h, l, c in rows]


class FakeMarketSource(MarketDataSource):
    """In-memory market-data source that records every call.

    ``gates`` maps a coin id to an asyncio.Event the OHLC call waits on,
    so tests can control the order in which responses arrive.
    """

    def __init__(
        self,
        search_results: Optional[dict[str, list[CoinMatch]]] = None,
        ohlc: Optional[dict[str, list[Candle]]] = None,
        prices: Optional[dict[str, list[tuple[int, float]]]] = None,
        fail: tuple[str, ...] = (),
        gates: Optional[dict[str, asyncio.Event]] = None,
    ):
        self.search_results = search_results or {}
        self.ohlc = ohlc or {}
        self.prices = prices or {}
        self.fail = fail
        self.gates = gates or {}
        self.calls: list[tuple[str, str]] = []

    async def search(self, query: str) -> list[CoinMatch]:
        self.calls.append(("search", query))
        if "search" in self.fail:
            raise MarketDataError("search failed")
        return self.search_results.get(query, [])

    async def get_ohlc(self, coin_id: str, days: int) -> list[Candle]:
        self.calls.append(("ohlc", coin_id))
        gate = self.gates.get(coin_id)
        if gate is not None:
            await gate.wait()
        if "ohlc" in self.fail:
            raise MarketDataError("ohlc failed")
        return self.ohlc.get(coin_id, [])

    async def get_price_series(self, coin_id: str, days: int) -> list[tuple[int, float]]:
        self.calls.append(("prices", coin_id))
        if "prices" in self.fail:
            raise MarketDataError("prices failed")
        return self.prices.get(coin_id, [])

    def count(self, kind: str) -> int:
        return sum(1 for call_kind, _ in self.calls if call_kind == kind)


def stalled_stream(first_chunk: str, stall: float = 5.0):
    """Replacement for ``stream_agent_text`` that yields one chunk, then hangs."""
    def _stream(agent, message, context=None, max_turns=8):
        async def generate():
            yield first_chunk
            await asyncio.sleep(stall)
            yield "never reached"
        return generate()
    return _stream


BTC_ROWS = [
    (1000, 10.0, 12.0, 9.0, 11.0),
    (2000, 11.0, 13.0, 10.0, 12.0),
]

ETH_ROWS = [
    (1000, 2000.0, 2050.0, 1980.0, 2010.0),
    (2000, 2010.0, 2030.0, 1990.0, 1995.0),
]


@pytest.fixture
def btc_candles() -> list[Candle]:
    return make_candles(BTC_ROWS)


@pytest.fixture
def fake_source() -> FakeMarketSource:
    """A source with OHLC data for bitcoin and ethereum."""
    return FakeMarketSource(
        ohlc={
            "bitcoin": make_candles(BTC_ROWS),
            "ethereum": make_candles(ETH_ROWS),
        },
    )
