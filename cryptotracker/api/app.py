"""HTTP API for Crypto Tracker.

Serves the dashboard page, the LLM analysis endpoint and the market
data endpoints the page draws from.
"""

import logging
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse

from cryptotracker.agents.analyst import CryptoAnalysisAgent, normalize_symbol
from cryptotracker.api.dashboard import render_dashboard
from cryptotracker.chart import layout, render_svg
from cryptotracker.config import get_chart_options, load_config
from cryptotracker.indicators import format_dollar, format_pct
from cryptotracker.market import MarketService, MarketView
from cryptotracker.models import MarketState
from cryptotracker.tools.market import set_market_service


logger = logging.getLogger(__name__)


def market_payload(state: MarketState, chart_options: Optional[dict[str, int]] = None) -> dict[str, Any]:
    """Serialize a market state with its chart plan, SVG and formatted values."""
    plan = layout(state.candles, **(chart_options or {}))
    info = state.info
    bands = state.bands

    return {
        "symbol": state.symbol,
        "status": state.status,
        "coin_id": state.coin_id,
        "message": state.message,
        "degraded": state.status == "degraded",
        "price": info.price if info else None,
        "change_24h": info.change_24h if info else None,
        "price_text": format_dollar(info.price if info else None),
        "change_text": format_pct(info.change_24h if info else None),
        "bands": bands.model_dump() if bands else None,
        "bands_text": (
            {name: format_dollar(value) for name, value in bands.model_dump().items()}
            if bands else None
        ),
        "candles": [candle.model_dump() for candle in state.candles],
        "chart": plan.model_dump(),
        "svg": render_svg(plan),
    }


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def create_app(
    config: Optional[dict[str, Any]] = None,
    market_service: Optional[MarketService] = None,
    analyst: Optional[CryptoAnalysisAgent] = None,
) -> FastAPI:
    """Create the FastAPI application.
    
    Args:
        config: Loaded configuration; read from disk when omitted.
        market_service: Market service override (defaults to CoinGecko).
        analyst: Analysis agent override (created on first use otherwise).
        
    Returns:
        Configured FastAPI app.
    """
    config = config if config is not None else load_config()
    service = market_service or MarketService.from_config(config)
    chart_options = get_chart_options(config)
    set_market_service(service)

    app = FastAPI(title="Crypto Tracker API", version="0.1.0")
    app.state.config = config
    app.state.market_service = service
    app.state.view = MarketView(service)
    app.state.analyst = analyst

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("server", {}).get("cors_origins", ["*"]),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    def get_analyst() -> CryptoAnalysisAgent:
        if app.state.analyst is None:
            app.state.analyst = CryptoAnalysisAgent.from_config(config)
        return app.state.analyst

    @app.get("/", response_class=HTMLResponse)
    async def dashboard():
        return render_dashboard()

    @app.post("/api/crypto")
    async def crypto(request: Request):
        body = await _read_body(request)
        symbol = normalize_symbol(body.get("symbol"))

        try:
            analysis = await get_analyst().analyze(symbol)
        except Exception as e:
            logger.exception("Error in /api/crypto for %s", symbol)
            return JSONResponse({"error": str(e) or "Internal error"}, status_code=500)

        return {"symbol": symbol, "analysis": analysis}

    @app.post("/api/crypto/stream")
    async def crypto_stream(request: Request):
        body = await _read_body(request)
        symbol = normalize_symbol(body.get("symbol"))
        analyst_agent = get_analyst()

        async def chunks() -> AsyncIterator[str]:
            try:
                async for chunk in analyst_agent.stream(symbol):
                    yield chunk
            except Exception as e:
                logger.exception("Error streaming analysis for %s", symbol)
                yield f"\n\n[error] {e}"

        return StreamingResponse(chunks(), media_type="text/plain; charset=utf-8")

    @app.get("/api/market")
    async def market(symbol: str = Query(default="BTC")):
        state = await service.load(symbol)
        return market_payload(state, chart_options)

    @app.post("/api/market")
    async def select_market(request: Request):
        body = await _read_body(request)
        raw = body.get("symbol")
        view: MarketView = app.state.view
        applied = await view.select(raw if isinstance(raw, str) else "")
        return {**market_payload(view.state, chart_options), "applied": applied}

    return app
