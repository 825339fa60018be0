"""Scalping band calculation and price formatting.

The bands are fixed percentage offsets from the latest price. They are
illustrative only and carry no market meaning.
"""

import math
from typing import Optional

from cryptotracker.models import BandFactors, Bands


DEFAULT_BAND_FACTORS = BandFactors()


def calculate_bands(
    price: Optional[float],
    factors: BandFactors = DEFAULT_BAND_FACTORS,
) -> Optional[Bands]:
    """Calculate the four scalping bands for a price.

    Args:
        price: Latest price, or None when no price is known yet.
        factors: Multipliers for each band.

    Returns:
        Bands, or None when ``price`` is None.
    """
    if price is None:
        return None

    return Bands(
        aggressive_buy=price * factors.aggressive_buy,
        conservative_buy=price * factors.conservative_buy,
        take_profit=price * factors.take_profit,
        hard_stop=price * factors.hard_stop,
    )


def _missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


def format_dollar(value: Optional[float]) -> str:
    """Format a price as ``$1,234.57`` (``-`` when missing)."""
    if _missing(value):
        return "-"
    return f"${value:,.2f}"


def format_pct(value: Optional[float]) -> str:
    """Format a percentage as ``+1.23%`` (``-`` when missing)."""
    if _missing(value):
        return "-"
    # -0.0 would print as "-0.00%"
    return f"{value + 0.0:+.2f}%"
