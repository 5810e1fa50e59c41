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
from sqlalchemy import text

from config.settings import settings
from src.fl_bets.api.router import router as bets_router
from src.fl_common.database import create_engine, create_session_factory
from src.fl_common.errors import AppError
from src.fl_common.logging_config import configure_logging
from src.fl_common.redis_client import close_redis, create_redis
from src.fl_common.response import error_response
from src.fl_gateway.middleware.rate_limit import RateLimitMiddleware
from src.fl_gateway.middleware.request_log import RequestLogMiddleware
from src.fl_ledger.api.router import router as ledger_router
from src.fl_social.api.analytics_router import router as analytics_router
from src.fl_social.api.router import router as social_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build engine, session factory and Redis client; verify DB. Shutdown: dispose."""
    configure_logging(settings)
    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.redis = create_redis(settings) if settings.RATE_LIMIT_ENABLED else None

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("%s %s started", settings.APP_NAME, VERSION)
    yield
    await engine.dispose()
    await close_redis(app.state.redis)


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    lifespan=lifespan,
)


app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("Unhandled application error %d: %s", exc.code, exc.message)
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(bets_router, prefix="/api/v1")
app.include_router(ledger_router, prefix="/api/v1")
app.include_router(social_router, prefix="/api/v1")
app.include_router(analytics_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}
