"""Agent tools for Crypto Tracker.

This module provides tools that AI agents use to read live market data.
"""

from cryptotracker.tools.market import (
    get_market_service,
    get_market_snapshot,
    set_market_service,
)

__all__ = [
    "get_market_service",
    "get_market_snapshot",
    "set_market_service",
]
