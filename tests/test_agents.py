"""Tests for the crypto analysis agent and its market tool.

**Feature: crypto-tracker**
"""

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cryptotracker.agents import AnalysisError, CryptoAnalysisAgent, build_task, normalize_symbol
from cryptotracker.agents import analyst as analyst_module
from cryptotracker.agents.analyst import CRYPTO_AGENT_INSTRUCTIONS, NO_RESPONSE_TEXT
from cryptotracker.market import MarketService
from cryptotracker.tools import get_market_service, get_market_snapshot, set_market_service
from conftest import stalled_stream


def fake_stream(chunks, delay: float = 0.0):
    def _stream(agent, message, context=None, max_turns=8):
        async def generate():
            for chunk in chunks:
                if delay:
                    await asyncio.sleep(delay)
                yield chunk
        return generate()
    return _stream


class TestSymbolNormalization:
    @given(symbol=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8))
    @settings(max_examples=50)
    def test_uppercases_and_trims(self, symbol: str):
        assert normalize_symbol(f"  {symbol} ") == symbol.upper()

    @pytest.mark.parametrize("raw", [None, "", "   ", 42, ["BTC"]])
    def test_defaults_to_btc(self, raw):
        assert normalize_symbol(raw) == "BTC"

    def test_task_mentions_symbol(self):
        task = build_task("avax")
        
        assert '"AVAX"' in task
        assert "short term trader" in task

    def test_instructions_forbid_invented_prices(self):
        assert "Do not invent prices" in CRYPTO_AGENT_INSTRUCTIONS
        assert "220 words" in CRYPTO_AGENT_INSTRUCTIONS


class TestCryptoAnalysisAgent:
    def test_agent_configuration(self):
        agent = CryptoAnalysisAgent(model="gpt-4o-mini", max_tokens=500)
        
        assert agent._agent.model == "gpt-4o-mini"
        assert agent._agent.model_settings.max_tokens == 500
        assert len(agent._agent.tools) == 1
        assert CryptoAnalysisAgent(use_market_tool=False)._agent.tools == []

    def test_analyze_joins_stream(self, monkeypatch):
        monkeypatch.setattr(analyst_module, "stream_agent_text", fake_stream(["Hello", " world", "\n"]))
        
        text = asyncio.run(CryptoAnalysisAgent().analyze("btc"))
        
        assert text == "Hello world"

    def test_empty_output_gets_notice(self, monkeypatch):
        monkeypatch.setattr(analyst_module, "stream_agent_text", fake_stream(["  "]))
        
        assert asyncio.run(CryptoAnalysisAgent().analyze("btc")) == NO_RESPONSE_TEXT

    def test_timeout_raises_analysis_error(self, monkeypatch):
        monkeypatch.setattr(analyst_module, "stream_agent_text", fake_stream(["slow"], delay=1.0))
        
        with pytest.raises(AnalysisError, match="timed out"):
            asyncio.run(CryptoAnalysisAgent(timeout=0.01).analyze("btc"))

    def test_stream_enforces_deadline(self, monkeypatch):
        monkeypatch.setattr(analyst_module, "stream_agent_text", stalled_stream("Bitcoin "))
        received = []
        
        async def consume():
            async for chunk in CryptoAnalysisAgent(timeout=0.05).stream("eth"):
                received.append(chunk)
        
        with pytest.raises(AnalysisError, match="ETH timed out after 0.05s"):
            asyncio.run(consume())
        
        assert received == ["Bitcoin "]

    def test_stream_passes_all_chunks(self, monkeypatch):
        monkeypatch.setattr(analyst_module, "stream_agent_text", fake_stream(["a", "b", "c"]))
        
        async def consume():
            return [chunk async for chunk in CryptoAnalysisAgent().stream("btc")]
        
        assert asyncio.run(consume()) == ["a", "b", "c"]

    def test_from_config(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        config = {
            "openai": {"api_key": "", "model": "gpt-4o-mini"},
            "agent": {"max_turns": 3, "max_tokens": 200, "timeout_seconds": 5},
        }
        
        agent = CryptoAnalysisAgent.from_config(config)
        
        assert agent.model == "gpt-4o-mini"
        assert agent.max_turns == 3
        assert agent.max_tokens == 200
        assert agent.timeout == 5.0


class TestMarketSnapshotTool:
    def test_without_service(self):
        set_market_service(None)
        
        result = asyncio.run(get_market_snapshot("btc"))
        
        assert result["status"] == "unavailable"
        assert result["price"] is None
        assert result["error"]

    def test_with_service(self, fake_source):
        service = MarketService.from_source(fake_source)
        set_market_service(service)
        try:
            assert get_market_service() is service
            result = asyncio.run(get_market_snapshot("btc"))
        finally:
            set_market_service(None)
        
        assert result["symbol"] == "BTC"
        assert result["status"] == "ok"
        assert result["price"] == 12
        assert result["change_24h"] == 20.0
        assert result["bands"]["take_profit"] == pytest.approx(12 * 1.004)
        assert result["error"] is None
