"""SVG rendering of a chart DrawPlan."""

from xml.sax.saxutils import escape

from cryptotracker.chart.layout import DrawPlan


FRAME_COLOR = "#1f2933"
GRID_COLOR = "#111827"
LABEL_COLOR = "#6b7280"
EMPTY_MESSAGE = "Waiting for market data…"


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_svg(plan: DrawPlan) -> str:
    """Render a DrawPlan as standalone SVG markup."""
    w, h = plan.width, plan.height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w} {h}" '
        f'width="{w}" height="{h}" class="candles">'
    ]

    if plan.empty:
        parts.append(
            f'<text x="{_num(w / 2)}" y="{_num(h / 2)}" fill="{LABEL_COLOR}" '
            f'font-size="13" text-anchor="middle">{escape(EMPTY_MESSAGE)}</text>'
        )
        parts.append("</svg>")
        return "".join(parts)

    left, right = plan.inner_left, plan.inner_right
    top, bottom = plan.inner_top, plan.inner_bottom

    for line in plan.grid:
        parts.append(
            f'<line x1="{_num(left)}" y1="{_num(line.y)}" x2="{_num(right)}" y2="{_num(line.y)}" '
            f'stroke="{GRID_COLOR}" stroke-width="1" stroke-dasharray="2,3"/>'
        )
        parts.append(
            f'<text x="{_num(right - 2)}" y="{_num(line.y - 2)}" fill="{LABEL_COLOR}" '
            f'font-size="9" text-anchor="end">{escape(line.label)}</text>'
        )

    # Frame
    for x1, y1, x2, y2 in (
        (left, top, left, bottom),
        (right, top, right, bottom),
        (left, top, right, top),
        (left, bottom, right, bottom),
    ):
        parts.append(
            f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
            f'stroke="{FRAME_COLOR}" stroke-width="1"/>'
        )

    for glyph in plan.candles:
        parts.append(f'<g data-time="{glyph.time}" class="{glyph.direction}">')
        parts.append(
            f'<line x1="{_num(glyph.x)}" y1="{_num(glyph.wick_top)}" '
            f'x2="{_num(glyph.x)}" y2="{_num(glyph.wick_bottom)}" '
            f'stroke="{glyph.stroke}" stroke-width="1.2"/>'
        )
        parts.append(
            f'<rect x="{_num(glyph.body_left)}" y="{_num(glyph.body_top)}" '
            f'width="{_num(glyph.body_width)}" height="{_num(glyph.body_height)}" '
            f'fill="{glyph.fill}" stroke="{glyph.stroke}" stroke-width="1" rx="1.5"/>'
        )
        parts.append("</g>")

    parts.append("</svg>")
    return "".join(parts)
