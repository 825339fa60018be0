"""Data models for Crypto Tracker."""

from cryptotracker.models.candle import Candle
from cryptotracker.models.coin import CoinMatch
from cryptotracker.models.price import BandFactors, Bands, PriceInfo
from cryptotracker.models.snapshot import MarketSnapshot, MarketState, MarketStatus

__all__ = [
    "Candle",
    "CoinMatch",
    "PriceInfo",
    "BandFactors",
    "Bands",
    "MarketSnapshot",
    "MarketState",
    "MarketStatus",
]
