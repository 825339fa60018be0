"""MarketSnapshot and MarketState data models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from cryptotracker.models.candle import Candle
from cryptotracker.models.price import Bands, PriceInfo


MarketStatus = Literal["loading", "ok", "degraded", "not_found", "unavailable"]


class MarketSnapshot(BaseModel):
    """Candles and price summary fetched for one coin."""

    coin_id: str = Field(..., min_length=1, description="Provider coin identifier")
    candles: list[Candle] = Field(..., min_length=1, description="Chronological candles")
    info: PriceInfo = Field(..., description="Price summary of the window")
    degraded: bool = Field(
        default=False, description="Built from the price-only fallback series"
    )

    model_config = {"frozen": True}


class MarketState(BaseModel):
    """What the market panel shows for one symbol."""

    symbol: str = Field(..., description="Ticker as requested, uppercased")
    status: MarketStatus = Field(..., description="Display state")
    coin_id: Optional[str] = Field(default=None, description="Resolved coin identifier")
    snapshot: Optional[MarketSnapshot] = Field(default=None, description="Market data")
    bands: Optional[Bands] = Field(default=None, description="Scalping bands")
    message: str = Field(default="", description="Explanation for the user")

    model_config = {"frozen": True}

    @property
    def info(self) -> Optional[PriceInfo]:
        return self.snapshot.info if self.snapshot else None

    @property
    def candles(self) -> list[Candle]:
        return list(self.snapshot.candles) if self.snapshot else []

    @classmethod
    def loading(cls, symbol: str) -> "MarketState":
        return cls(symbol=symbol, status="loading", message="Loading market data...")

    @classmethod
    def not_found(cls, symbol: str) -> "MarketState":
        return cls(
            symbol=symbol,
            status="not_found",
            message=f"Could not find a market for symbol {symbol or '(empty)'}.",
        )

    @classmethod
    def unavailable(cls, symbol: str, coin_id: Optional[str] = None) -> "MarketState":
        return cls(
            symbol=symbol,
            status="unavailable",
            coin_id=coin_id,
            message="Unable to load market data for this symbol.",
        )

    @classmethod
    def from_snapshot(
        cls,
        symbol: str,
        snapshot: MarketSnapshot,
        bands: Optional[Bands],
    ) -> "MarketState":
        if snapshot.degraded:
            status: MarketStatus = "degraded"
            message = "OHLC data unavailable; showing a price-only series."
        else:
            status = "ok"
            message = ""
        return cls(
            symbol=symbol,
            status=status,
            coin_id=snapshot.coin_id,
            snapshot=snapshot,
            bands=bands,
            message=message,
        )
