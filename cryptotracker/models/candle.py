"""Candle (OHLC) data model."""

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLC candle."""

    time: int = Field(..., ge=0, description="Candle open time in ms since epoch")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")

    model_config = {"frozen": True}

    @property
    def bullish(self) -> bool:
        """Whether the candle closed at or above its open."""
        return self.close >= self.open

    @classmethod
    def flat(cls, time: int, price: float) -> "Candle":
        """Build a degenerate candle from a single price point."""
        return cls(time=time, open=price, high=price, low=price, close=price)
