"""AI agents for Crypto Tracker.

This module provides the agent that writes short crypto analyses:
- CryptoAnalysisAgent: Narrative analysis with live market lookups
"""

from cryptotracker.agents.base import (
    AnalysisError,
    create_agent,
    get_model,
    stream_agent_text,
)
from cryptotracker.agents.analyst import (
    CryptoAnalysisAgent,
    build_task,
    normalize_symbol,
)

__all__ = [
    # Base utilities
    "AnalysisError",
    "create_agent",
    "get_model",
    "stream_agent_text",
    # Agents
    "CryptoAnalysisAgent",
    "build_task",
    "normalize_symbol",
]
