"""Tests for last-request-wins view state.

**Feature: crypto-tracker**
"""

import asyncio

from cryptotracker.market import MarketService, MarketView
from conftest import BTC_ROWS, ETH_ROWS, FakeMarketSource, make_candles


def make_source(gates=None) -> FakeMarketSource:
    return FakeMarketSource(
        ohlc={
            "bitcoin": make_candles(BTC_ROWS),
            "ethereum": make_candles(ETH_ROWS),
        },
        gates=gates,
    )


class TestMarketView:
    """
    **Feature: crypto-tracker, Stale response handling**
    
    A slow response for an earlier symbol never overwrites the state of a
    newer request.
    """

    def test_select_applies_state(self):
        view = MarketView(MarketService.from_source(make_source()))
        
        applied = asyncio.run(view.select("eth"))
        
        assert applied
        assert view.symbol == "ETH"
        assert view.state.status == "ok"
        assert view.state.coin_id == "ethereum"

    def test_initial_state_is_loading(self):
        view = MarketView(MarketService.from_source(make_source()), "btc")
        
        assert view.symbol == "BTC"
        assert view.state.status == "loading"

    def test_stale_response_discarded(self):
        async def scenario():
            gate = asyncio.Event()
            view = MarketView(MarketService.from_source(make_source({"bitcoin": gate})))
            
            first = asyncio.create_task(view.select("BTC"))
            await asyncio.sleep(0)
            assert view.symbol == "BTC"
            assert view.state.status == "loading"
            
            second = await view.select("ETH")
            gate.set()
            first_applied = await first
            return view, first_applied, second

        view, first_applied, second_applied = asyncio.run(scenario())
        
        assert second_applied
        assert not first_applied
        assert view.symbol == "ETH"
        assert view.state.coin_id == "ethereum"
        assert view.state.info.price == 1995.0

    def test_tokens_increase(self):
        view = MarketView(MarketService.from_source(make_source()))
        
        first = view.begin("BTC")
        second = view.begin("ETH")
        
        assert second > first
        assert view.is_current(second)
        assert not view.is_current(first)

    def test_unexpected_failure_becomes_unavailable(self):
        class BrokenService:
            async def load(self, symbol: str):
                raise RuntimeError("boom")

        view = MarketView(BrokenService())
        
        applied = asyncio.run(view.select("sol"))
        
        assert applied
        assert view.symbol == "SOL"
        assert view.state.status == "unavailable"
        assert view.state.message
