"""Candlestick chart geometry.

``layout`` turns a candle sequence and a canvas size into a DrawPlan:
axis bounds, horizontal grid lines and per-candle wick/body coordinates.
It is a pure function and is re-run on every render.
"""

from typing import Literal, Sequence

from pydantic import BaseModel, Field

from cryptotracker.models import Candle


BULL_STROKE = "#22c55e"
BULL_FILL = "rgba(34,197,94,0.25)"
BEAR_STROKE = "#f97373"
BEAR_FILL = "rgba(248,113,113,0.25)"


class GridLine(BaseModel):
    """A horizontal grid line with its price label."""

    y: float = Field(..., description="Screen y-coordinate")
    price: float = Field(..., description="Price represented by the line")
    label: str = Field(..., description="Formatted price label")

    model_config = {"frozen": True}


class CandleGlyph(BaseModel):
    """Screen geometry for one candle."""

    time: int = Field(..., description="Candle time in ms since epoch")
    x: float = Field(..., description="Slot center x-coordinate")
    wick_top: float = Field(..., description="y of the high")
    wick_bottom: float = Field(..., description="y of the low")
    body_left: float = Field(..., description="Body left edge")
    body_top: float = Field(..., description="Body top edge")
    body_width: float = Field(..., gt=0, description="Body width")
    body_height: float = Field(..., gt=0, description="Body height")
    direction: Literal["bull", "bear"] = Field(..., description="close >= open is bull")
    stroke: str = Field(..., description="Wick and outline color")
    fill: str = Field(..., description="Body fill color")

    model_config = {"frozen": True}


class DrawPlan(BaseModel):
    """Everything needed to draw a candlestick chart."""

    width: int = Field(..., gt=0, description="Canvas width")
    height: int = Field(..., gt=0, description="Canvas height")
    pad_x: int = Field(..., ge=0, description="Horizontal margin")
    pad_y: int = Field(..., ge=0, description="Vertical margin")
    empty: bool = Field(default=False, description="No candles to draw")
    min_price: float | None = Field(default=None, description="Lowest low")
    max_price: float | None = Field(default=None, description="Highest high")
    grid: list[GridLine] = Field(default_factory=list, description="Horizontal grid lines")
    candles: list[CandleGlyph] = Field(default_factory=list, description="Candle glyphs")

    model_config = {"frozen": True}

    @property
    def inner_top(self) -> float:
        return float(self.pad_y)

    @property
    def inner_bottom(self) -> float:
        return float(self.height - self.pad_y)

    @property
    def inner_left(self) -> float:
        return float(self.pad_x)

    @property
    def inner_right(self) -> float:
        return float(self.width - self.pad_x)


def format_axis_price(price: float) -> str:
    """Format a grid label: whole dollars from 1000 up, cents below."""
    if abs(price) >= 1000:
        return f"{price:,.0f}"
    return f"{price:,.2f}"


def layout(
    candles: Sequence[Candle],
    width: int = 640,
    height: int = 260,
    pad_x: int = 20,
    pad_y: int = 10,
    ticks: int = 4,
    min_body_height: float = 3.0,
) -> DrawPlan:
    """Compute chart geometry for a candle sequence.

    Args:
        candles: Candles in chronological order.
        width: Canvas width.
        height: Canvas height.
        pad_x: Left and right margin.
        pad_y: Top and bottom margin.
        ticks: Number of horizontal grid lines.
        min_body_height: Smallest rendered body height.

    Returns:
        DrawPlan; ``empty`` is set when there are no candles.

    Raises:
        ValueError: If the margins leave no drawable area.
    """
    inner_width = width - pad_x * 2
    inner_height = height - pad_y * 2
    if inner_width <= 0 or inner_height <= 0:
        raise ValueError(f"Margins {pad_x}x{pad_y} leave no room in a {width}x{height} canvas")

    if not candles:
        return DrawPlan(width=width, height=height, pad_x=pad_x, pad_y=pad_y, empty=True)

    min_price = min(c.low for c in candles)
    max_price = max(c.high for c in candles)
    # A flat series would divide by zero
    span = (max_price - min_price) or 1.0
    bottom = pad_y + inner_height

    def map_y(price: float) -> float:
        return bottom - (price - min_price) / span * inner_height

    grid = []
    if ticks > 0:
        for i in range(ticks):
            fraction = i / (ticks - 1) if ticks > 1 else 0.0
            price = min_price + span * (1 - fraction)
            grid.append(GridLine(y=map_y(price), price=price, label=format_axis_price(price)))

    step = inner_width / len(candles)
    body_width = max(step * 0.4, 4.0)

    glyphs = []
    for i, candle in enumerate(candles):
        x_center = pad_x + step * (i + 0.5)
        y_open = map_y(candle.open)
        y_close = map_y(candle.close)

        body_height = max(abs(y_close - y_open), min_body_height)
        body_top = min(y_open, y_close)
        if body_top + body_height > bottom:
            body_top = max(bottom - body_height, float(pad_y))

        bullish = candle.bullish
        glyphs.append(CandleGlyph(
            time=candle.time,
            x=x_center,
            wick_top=map_y(candle.high),
            wick_bottom=map_y(candle.low),
            body_left=x_center - body_width / 2,
            body_top=body_top,
            body_width=body_width,
            body_height=body_height,
            direction="bull" if bullish else "bear",
            stroke=BULL_STROKE if bullish else BEAR_STROKE,
            fill=BULL_FILL if bullish else BEAR_FILL,
        ))

    return DrawPlan(
        width=width,
        height=height,
        pad_x=pad_x,
        pad_y=pad_y,
        min_price=min_price,
        max_price=max_price,
        grid=grid,
        candles=glyphs,
    )
