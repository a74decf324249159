"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.sx_common.database import check_connection, engine
from src.sx_common.errors import AppError, StoreUnavailableError
from src.sx_common.response import error_response
from src.sx_gateway.middleware.request_log import RequestLogMiddleware
from src.sx_market.api.router import router as market_router
from src.sx_matching.application.service import get_matching_engine
from src.sx_order.api.router import router as order_router
from src.sx_pricing.api.router import router as pricing_router
from src.sx_wallet.api.router import router as wallet_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB connection and build the engine. Shutdown: dispose."""
    # Startup
    await check_connection()
    matching = get_matching_engine()
    logger.info("Matching engine ready for %d pair(s)", len(matching.pairs.all()))
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(mode="json"),
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    err = StoreUnavailableError()
    resp = error_response(err.code, err.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=err.http_status,
        content=resp.model_dump(mode="json"),
    )


app.include_router(market_router, prefix="/api/v1")
app.include_router(order_router, prefix="/api/v1")
app.include_router(wallet_router, prefix="/api/v1")
app.include_router(pricing_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
