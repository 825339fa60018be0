"""Crypto Analysis Agent.

This agent writes a short narrative analysis of a crypto asset for a
short-term trader. It can look up live market data through a tool but
is told never to invent prices.
"""

import asyncio
from typing import Any, AsyncIterator, Optional

from agents import Agent, function_tool, set_default_openai_key

from cryptotracker.agents.base import (
    AnalysisError,
    collect_text,
    create_agent,
    stream_agent_text,
)
from cryptotracker.config import get_openai_settings
from cryptotracker.tools.market import get_market_snapshot


DEFAULT_SYMBOL = "BTC"

NO_RESPONSE_TEXT = "Agent finished without returning a response."


CRYPTO_AGENT_INSTRUCTIONS = """You are a crypto analysis agent. The frontend will send you a token symbol
like BTC, ETH, or AVAX.

Your job:
1. Briefly describe the asset's typical narrative or use case.
2. Give three very short bullet points about what a short term trader should
   watch (volatility, liquidity, news sensitivity, etc.).
3. End with one clear line that says this is not financial advice.

Keep every answer under 220 words.
Do not invent prices or fake numbers. If you mention a price or a percentage
move, take it from the market snapshot tool; if the tool reports no data,
say so instead of guessing.
"""


@function_tool
async def get_market_snapshot_tool(symbol: str) -> dict:
    """Get the live price, window change and scalping bands for a ticker.
    
    Use this tool before quoting any price or percentage move.
    
    Args:
        symbol: Crypto ticker symbol (e.g., "BTC", "ETH").
        
    Returns:
        Market summary with price, change_24h, bands and status.
    """
    return await get_market_snapshot(symbol)


def normalize_symbol(raw: Any) -> str:
    """Uppercase and trim a requested symbol, defaulting to BTC.
    
    Args:
        raw: Symbol as received; anything but a non-blank string means BTC.
        
    Returns:
        Normalized ticker.
    """
    if isinstance(raw, str) and raw.strip():
        return raw.strip().upper()
    return DEFAULT_SYMBOL


def build_task(symbol: str) -> str:
    """Build the task prompt for one symbol."""
    return f"""User request:
Give me a concise analysis for the token with symbol "{normalize_symbol(symbol)}".
Focus on the narrative and what a short term trader should pay attention to."""


class CryptoAnalysisAgent:
    """Agent for short narrative analysis of crypto assets.
    
    Streams the agent's text output and joins it into one answer,
    bounded by a turn limit, a token limit and a wall-clock timeout.
    """
    
    def __init__(
        self,
        model: Optional[str] = None,
        max_turns: int = 8,
        max_tokens: int = 800,
        timeout: float = 60.0,
        use_market_tool: bool = True,
    ):
        """Initialize the Crypto Analysis Agent.
        
        Args:
            model: Optional model override.
            max_turns: Maximum agent loop iterations per request.
            max_tokens: Maximum tokens per model response.
            timeout: Seconds before a request is abandoned.
            use_market_tool: Give the agent the live market snapshot tool.
        """
        self.model = model
        self.max_turns = max_turns
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.use_market_tool = use_market_tool
        self._agent = self._create_agent()
    
    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        use_market_tool: bool = True,
    ) -> "CryptoAnalysisAgent":
        """Create the agent from a loaded configuration."""
        api_key, model = get_openai_settings(config)
        if api_key:
            set_default_openai_key(api_key)
        agent_config = config.get("agent", {})
        return cls(
            model=model,
            max_turns=int(agent_config.get("max_turns", 8)),
            max_tokens=int(agent_config.get("max_tokens", 800)),
            timeout=float(agent_config.get("timeout_seconds", 60)),
            use_market_tool=use_market_tool,
        )
    
    def _create_agent(self) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Crypto Analysis Agent",
            instructions=CRYPTO_AGENT_INSTRUCTIONS,
            tools=[get_market_snapshot_tool] if self.use_market_tool else [],
            model=self.model,
            max_tokens=self.max_tokens,
        )
    
    async def stream(self, symbol: str) -> AsyncIterator[str]:
        """Stream the analysis for a symbol as text deltas.
        
        The whole stream shares one deadline of ``timeout`` seconds.
        
        Args:
            symbol: Ticker to analyze.
            
        Yields:
            Text chunks in generation order.
            
        Raises:
            AnalysisError: If the agent does not finish within the timeout.
        """
        chunks = stream_agent_text(self._agent, build_task(symbol), max_turns=self.max_turns)
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise asyncio.TimeoutError
                try:
                    chunk = await asyncio.wait_for(chunks.__anext__(), remaining)
                except StopAsyncIteration:
                    return
                yield chunk
        except asyncio.TimeoutError as e:
            raise AnalysisError(
                f"Analysis for {normalize_symbol(symbol)} timed out after {self.timeout:g}s"
            ) from e
        finally:
            await chunks.aclose()
    
    async def analyze(self, symbol: str) -> str:
        """Analyze a symbol and return the full text.
        
        Args:
            symbol: Ticker to analyze.
            
        Returns:
            Analysis text, or a fixed notice if the agent said nothing.
            
        Raises:
            AnalysisError: If the agent does not finish within the timeout.
        """
        text = await collect_text(self.stream(symbol))
        return text.strip() or NO_RESPONSE_TEXT
