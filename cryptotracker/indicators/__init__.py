"""Derived price levels for Crypto Tracker."""

from cryptotracker.indicators.bands import (
    DEFAULT_BAND_FACTORS,
    calculate_bands,
    format_dollar,
    format_pct,
)

__all__ = [
    "DEFAULT_BAND_FACTORS",
    "calculate_bands",
    "format_dollar",
    "format_pct",
]
