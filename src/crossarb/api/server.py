"""
FastAPI server for the detection engine.

Routes:
    GET  /api/trading-pairs
    GET  /api/arbitrage-opportunities
    GET  /api/pair-status
    GET  /api/health
    POST /get-prediction
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from crossarb import __version__
from crossarb.config.settings import Settings, get_settings
from crossarb.core.engine import ArbitrageEngine
from crossarb.exchange.http import HttpClientError


logger = logging.getLogger(__name__)


class PredictionRequest(BaseModel):
    symbol: str


def create_app(
    engine: ArbitrageEngine | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        engine: Pre-built engine. Its lifecycle is then left to the caller.
        settings: Settings for an engine built at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            app.state.engine = engine
            yield
            return

        owned = ArbitrageEngine(settings or get_settings())
        app.state.engine = owned
        await owned.start()
        try:
            yield
        finally:
            await owned.shutdown()

    app = FastAPI(title="Cross-Venue Arbitrage", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if engine is not None:
        app.state.engine = engine

    app.get("/api/trading-pairs")(get_trading_pairs)
    app.get("/api/arbitrage-opportunities")(get_opportunities)
    app.get("/api/pair-status")(get_pair_status)
    app.get("/api/health")(get_health)
    app.post("/get-prediction")(get_prediction)
    return app


def _engine(request: Request) -> ArbitrageEngine:
    return request.app.state.engine


async def get_trading_pairs(request: Request) -> dict[str, Any]:
    pairs = await _engine(request).current_pairs()
    return {"pairs": [pair.to_dict() for pair in pairs]}


async def get_opportunities(request: Request) -> dict[str, Any]:
    opportunities = await _engine(request).find_opportunities()
    return {"opportunities": [opp.to_dict() for opp in opportunities]}


async def get_pair_status(request: Request) -> dict[str, Any]:
    return {"status": _engine(request).status.to_dict()}


async def get_health(request: Request) -> dict[str, Any]:
    return _engine(request).health()


async def get_prediction(body: PredictionRequest, request: Request) -> Any:
    logger.info(f"Prediction requested for {body.symbol}")
    try:
        return await _engine(request).predict(body.symbol)
    except HttpClientError as e:
        logger.error(f"Error fetching prediction: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
