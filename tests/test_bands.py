"""Tests for scalping band calculation and formatting.

**Feature: crypto-tracker**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cryptotracker.indicators import (
    DEFAULT_BAND_FACTORS,
    calculate_bands,
    format_dollar,
    format_pct,
)
from cryptotracker.models import BandFactors


TEST_FACTORS = BandFactors(
    aggressive_buy=0.998,
    conservative_buy=0.995,
    take_profit=1.004,
    hard_stop=0.992,
)


class TestCalculateBands:
    """
    **Feature: crypto-tracker, Scalping bands**
    
    *For any* price, each band is the price scaled by its factor; a
    missing price yields no bands at all.
    """

    def test_missing_price_returns_none(self):
        assert calculate_bands(None) is None
        assert calculate_bands(None, TEST_FACTORS) is None

    def test_zero_price_is_not_missing(self):
        bands = calculate_bands(0.0)
        
        assert bands is not None
        assert bands.take_profit == 0.0

    def test_known_values(self):
        bands = calculate_bands(100, TEST_FACTORS)
        
        assert bands.aggressive_buy == pytest.approx(99.8, abs=1e-9)
        assert bands.conservative_buy == pytest.approx(99.5, abs=1e-9)
        assert bands.take_profit == pytest.approx(100.4, abs=1e-9)
        assert bands.hard_stop == pytest.approx(99.2, abs=1e-9)

    def test_default_factors(self):
        assert DEFAULT_BAND_FACTORS.aggressive_buy == 0.997
        assert DEFAULT_BAND_FACTORS.conservative_buy == 0.994
        assert DEFAULT_BAND_FACTORS.take_profit == 1.004
        assert DEFAULT_BAND_FACTORS.hard_stop == 0.989

    @given(price=st.floats(min_value=0.0001, max_value=1e7, allow_nan=False))
    @settings(max_examples=100)
    def test_band_ordering(self, price: float):
        """
        *For any* positive price with the default factors, the levels are
        ordered stop < conservative < aggressive < price < take-profit.
        """
        bands = calculate_bands(price)
        
        assert bands.hard_stop < bands.conservative_buy < bands.aggressive_buy
        assert bands.aggressive_buy < price < bands.take_profit


class TestFormatting:
    def test_format_dollar(self):
        assert format_dollar(1234.567) == "$1,234.57"
        assert format_dollar(0.5) == "$0.50"
        assert format_dollar(None) == "-"
        assert format_dollar(math.nan) == "-"

    def test_format_pct(self):
        assert format_pct(1.234) == "+1.23%"
        assert format_pct(-2.5) == "-2.50%"
        assert format_pct(0.0) == "+0.00%"
        assert format_pct(-0.0) == "+0.00%"
        assert format_pct(None) == "-"
