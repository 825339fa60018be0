"""Candlestick chart geometry and rendering."""

from cryptotracker.chart.layout import (
    CandleGlyph,
    DrawPlan,
    GridLine,
    format_axis_price,
    layout,
)
from cryptotracker.chart.svg import render_svg

__all__ = [
    "CandleGlyph",
    "DrawPlan",
    "GridLine",
    "format_axis_price",
    "layout",
    "render_svg",
]
