"""PriceInfo, BandFactors and Bands data models."""

from typing import Sequence

from pydantic import BaseModel, Field

from cryptotracker.models.candle import Candle


class PriceInfo(BaseModel):
    """Summary of a candle window: latest price and window change."""

    price: float = Field(..., ge=0, description="Close of the last candle")
    change_24h: float = Field(
        default=0.0, description="Percent change from first open to last close"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "PriceInfo":
        """Derive the price summary from a chronological candle sequence.

        Args:
            candles: Non-empty candle sequence, oldest first.

        Returns:
            PriceInfo for the window.

        Raises:
            ValueError: If ``candles`` is empty.
        """
        if not candles:
            raise ValueError("Cannot summarize an empty candle sequence")

        price_now = candles[-1].close
        price_start = candles[0].open
        if price_start > 0:
            change = (price_now - price_start) / price_start * 100
        else:
            change = 0.0
        return cls(price=price_now, change_24h=change)


class BandFactors(BaseModel):
    """Multipliers applied to the latest price to derive scalping bands."""

    aggressive_buy: float = Field(default=0.997, gt=0, description="Aggressive entry factor")
    conservative_buy: float = Field(default=0.994, gt=0, description="Conservative entry factor")
    take_profit: float = Field(default=1.004, gt=0, description="Take-profit factor")
    hard_stop: float = Field(default=0.989, gt=0, description="Hard stop factor")

    model_config = {"frozen": True}


class Bands(BaseModel):
    """Illustrative intraday price levels derived from the latest price."""

    aggressive_buy: float = Field(..., description="Aggressive entry level")
    conservative_buy: float = Field(..., description="Conservative entry level")
    take_profit: float = Field(..., description="Take-profit level")
    hard_stop: float = Field(..., description="Hard stop level")

    model_config = {"frozen": True}
