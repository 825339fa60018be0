"""Property-based tests for chart geometry and SVG rendering.

**Feature: crypto-tracker**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cryptotracker.chart import format_axis_price, layout, render_svg
from cryptotracker.chart.layout import BEAR_STROKE, BULL_STROKE
from cryptotracker.models import Candle
from conftest import make_candles


TOLERANCE = 1e-6


@st.composite
def ohlc_candles(draw, min_size: int = 1, max_size: int = 50):
    """Generate chronological candles satisfying low <= open, close <= high."""
    count = draw(st.integers(min_value=min_size, max_value=max_size))
    candles = []
    for i in range(count):
        low = draw(st.floats(min_value=0.0, max_value=1e6, allow_nan=False))
        high = draw(st.floats(min_value=low, max_value=low * 1.5 + 1, allow_nan=False))
        open_ = draw(st.floats(min_value=low, max_value=high, allow_nan=False))
        close = draw(st.floats(min_value=low, max_value=high, allow_nan=False))
        candles.append(Candle(time=(i + 1) * 60_000, open=open_, high=high, low=low, close=close))
    return candles


class TestLayoutBounds:
    """
    **Feature: crypto-tracker, Chart geometry**
    
    *For any* non-empty candle sequence, every price maps inside the
    chart's inner vertical bounds.
    """

    @given(candles=ohlc_candles())
    @settings(max_examples=100)
    def test_prices_map_inside_inner_area(self, candles: list[Candle]):
        plan = layout(candles)
        
        assert not plan.empty
        assert plan.min_price == min(c.low for c in candles)
        assert plan.max_price == max(c.high for c in candles)
        assert len(plan.candles) == len(candles)
        
        for glyph in plan.candles:
            assert plan.inner_top - TOLERANCE <= glyph.wick_top <= plan.inner_bottom + TOLERANCE
            assert plan.inner_top - TOLERANCE <= glyph.wick_bottom <= plan.inner_bottom + TOLERANCE
            assert glyph.wick_top <= glyph.wick_bottom + TOLERANCE
            assert glyph.body_top >= plan.inner_top - TOLERANCE
            assert glyph.body_top + glyph.body_height <= plan.inner_bottom + TOLERANCE
            assert plan.inner_left <= glyph.x <= plan.inner_right

    @given(candles=ohlc_candles())
    @settings(max_examples=50)
    def test_grid_lines_inside_inner_area(self, candles: list[Candle]):
        plan = layout(candles, ticks=4)
        
        assert len(plan.grid) == 4
        ys = [line.y for line in plan.grid]
        assert ys == sorted(ys)
        for y in ys:
            assert plan.inner_top - TOLERANCE <= y <= plan.inner_bottom + TOLERANCE

    @given(
        price=st.floats(min_value=0.0, max_value=1e6, allow_nan=False),
        count=st.integers(min_value=1, max_value=50),
    )
    @settings(max_examples=50)
    def test_flat_series_does_not_divide_by_zero(self, price: float, count: int):
        """
        *For any* series with max == min, the span floor keeps the
        geometry finite.
        """
        candles = [Candle.flat(i, price) for i in range(count)]
        
        plan = layout(candles)
        
        for glyph in plan.candles:
            assert glyph.wick_top == pytest.approx(plan.inner_bottom)
            assert glyph.body_height == 3.0
            assert glyph.body_top + glyph.body_height <= plan.inner_bottom + TOLERANCE


class TestLayoutDetails:
    def test_empty_sequence_is_no_data_state(self):
        plan = layout([])
        
        assert plan.empty
        assert plan.min_price is None
        assert plan.max_price is None
        assert plan.candles == []
        assert plan.grid == []

    def test_slot_centers_and_body_width(self):
        candles = make_candles([
            (1, 10, 12, 9, 11),
            (2, 11, 13, 10, 12),
        ])
        
        plan = layout(candles, width=640, height=260, pad_x=20, pad_y=10)
        
        # inner width 600 split into two slots of 300
        assert [g.x for g in plan.candles] == [170.0, 470.0]
        assert all(g.body_width == pytest.approx(120.0) for g in plan.candles)

    def test_high_and_low_hit_inner_edges(self):
        candles = make_candles([
            (1, 10, 12, 9, 11),
            (2, 11, 13, 10, 12),
        ])
        
        plan = layout(candles, width=640, height=260, pad_x=20, pad_y=10)
        
        assert plan.candles[1].wick_top == pytest.approx(10.0)
        assert plan.candles[0].wick_bottom == pytest.approx(250.0)

    def test_direction_and_colors(self):
        candles = make_candles([
            (1, 10, 12, 9, 11),
            (2, 11, 12, 9, 10),
            (3, 10, 11, 9, 10),
        ])
        
        plan = layout(candles)
        
        assert [g.direction for g in plan.candles] == ["bull", "bear", "bull"]
        assert plan.candles[0].stroke == BULL_STROKE
        assert plan.candles[1].stroke == BEAR_STROKE

    def test_minimum_body_height(self):
        candles = make_candles([
            (1, 100.0, 200.0, 50.0, 100.01),
            (2, 100.0, 150.0, 60.0, 120.0),
        ])
        
        plan = layout(candles, min_body_height=3)
        
        assert plan.candles[0].body_height == 3

    def test_tick_labels_switch_precision(self):
        assert format_axis_price(64250.4) == "64,250"
        assert format_axis_price(1000) == "1,000"
        assert format_axis_price(12.3456) == "12.35"

    def test_grid_runs_from_max_down_to_min(self):
        candles = make_candles([(1, 10, 40, 10, 40)])
        
        plan = layout(candles, ticks=4)
        
        assert [line.price for line in plan.grid] == pytest.approx([40, 30, 20, 10])
        assert plan.grid[0].y == pytest.approx(plan.inner_top)
        assert plan.grid[-1].y == pytest.approx(plan.inner_bottom)

    def test_margins_must_leave_room(self):
        with pytest.raises(ValueError):
            layout([], width=40, height=260, pad_x=20, pad_y=10)


class TestRenderSvg:
    def test_empty_plan_renders_placeholder(self):
        svg = render_svg(layout([]))
        
        assert svg.startswith("<svg")
        assert "Waiting for market data" in svg
        assert "<rect" not in svg

    def test_one_body_and_wick_per_candle(self):
        candles = make_candles([
            (1, 10, 12, 9, 11),
            (2, 11, 13, 10, 12),
            (3, 12, 12.5, 10, 10.5),
        ])
        
        svg = render_svg(layout(candles))
        
        assert svg.count("<rect") == 3
        assert svg.count("<g ") == 3
        assert 'data-time="3"' in svg
        assert svg.endswith("</svg>")
