"""CoinMatch data model."""

from typing import Optional

from pydantic import BaseModel, Field


class CoinMatch(BaseModel):
    """One entry of a market-data search result."""

    id: str = Field(..., min_length=1, description="Provider coin identifier")
    symbol: str = Field(default="", description="Ticker symbol")
    name: Optional[str] = Field(default=None, description="Display name")
    market_cap_rank: Optional[int] = Field(default=None, description="Market cap rank")

    model_config = {"frozen": True}
