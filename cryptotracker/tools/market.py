"""Market data tools for AI agents.

These tools let agents look up live prices, the window change and the
scalping bands instead of guessing numbers.
"""

from typing import Optional

from cryptotracker.market.snapshot import MarketService


# Global market service instance (set by application)
_market_service: Optional[MarketService] = None


def set_market_service(service: Optional[MarketService]) -> None:
    """Set the global market service used by the tools.
    
    Args:
        service: Market service to use, or None to clear it.
    """
    global _market_service
    _market_service = service


def get_market_service() -> Optional[MarketService]:
    """Get the current market service instance.
    
    Returns:
        Current market service or None if not set.
    """
    return _market_service


async def get_market_snapshot(symbol: str) -> dict:
    """Get a live market summary for a crypto ticker.
    
    Args:
        symbol: Ticker symbol (e.g., "BTC", "ETH").
        
    Returns:
        Dictionary containing:
        - symbol: The uppercased ticker
        - status: ok, degraded, not_found or unavailable
        - coin_id: Resolved provider identifier (None if not found)
        - price: Latest price in USD (None if unavailable)
        - change_24h: Percent change over the window (None if unavailable)
        - bands: Scalping band levels (None if unavailable)
        - error: Error message if data is missing (None if successful)
    """
    service = get_market_service()
    if service is None:
        return {
            "symbol": symbol.strip().upper(),
            "status": "unavailable",
            "coin_id": None,
            "price": None,
            "change_24h": None,
            "bands": None,
            "error": "Market data service not configured.",
        }
    
    state = await service.load(symbol)
    info = state.info
    
    return {
        "symbol": state.symbol,
        "status": state.status,
        "coin_id": state.coin_id,
        "price": round(info.price, 6) if info else None,
        "change_24h": round(info.change_24h, 2) if info else None,
        "bands": state.bands.model_dump() if state.bands else None,
        "error": state.message if state.status in ("not_found", "unavailable") else None,
    }
