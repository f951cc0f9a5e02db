import logging
from typing import Optional
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.api.router import api_router
from app.core.config import get_settings
from app.core.logging import setup_logging
from app.core.rate_limit import RedisRateLimitMiddleware
from app.services.market_errors import MarketStoreError, MarketValidationError

settings = get_settings()

if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
        send_default_pii=False,
    )
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "Database URL configuration active",
        extra={
            "database_url_source": settings.resolved_database_url_source,
            "database_host": (
                settings.postgres_host if settings.resolved_database_url_source == "postgres_fallback" else None
            ),
            "database_name": (
                settings.postgres_db if settings.resolved_database_url_source == "postgres_fallback" else None
            ),
        },
    )
    redis: Optional[Redis] = None
    try:
        redis = Redis.from_url(settings.redis_url, decode_responses=True)
        await redis.ping()
        app.state.redis = redis
        logger.info("Redis connected")
    except (RedisError, OSError):
        app.state.redis = None
        logger.exception("Redis connection failed; rate limiting disabled")

    yield

    if redis is not None:
        await redis.aclose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
)
app.add_middleware(RedisRateLimitMiddleware, requests_per_minute=settings.rate_limit_requests_per_minute)


@app.exception_handler(MarketValidationError)
async def market_validation_error_handler(_request: Request, exc: MarketValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Invalid {exc.field}: {exc.reason}"},
    )


@app.exception_handler(MarketStoreError)
async def market_store_error_handler(_request: Request, exc: MarketStoreError) -> JSONResponse:
    # Logged with its cause where it was raised.
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": f"Market store unavailable during {exc.operation}"},
    )


app.include_router(api_router, prefix="/api/v1")
