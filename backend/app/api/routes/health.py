import logging

from fastapi import APIRouter, Request
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import AsyncSessionLocal

router = APIRouter()
logger = logging.getLogger(__name__)


async def _database_ok() -> bool:
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Readiness database probe failed")
        return False
    return True


async def _redis_state(request: Request) -> str:
    redis = getattr(request.app.state, "redis", None)
    if redis is None:
        return "disabled"
    try:
        return "ok" if await redis.ping() else "error"
    except (RedisError, OSError):
        logger.exception("Readiness redis probe failed")
        return "error"


@router.get("/health/live")
async def health_live() -> dict:
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(request: Request) -> dict:
    # Redis only backs rate limiting; the board serves without it.
    db_ok = await _database_ok()
    redis_state = await _redis_state(request)
    status = "ok" if db_ok and redis_state != "error" else "degraded"
    return {"status": status, "db": db_ok, "redis": redis_state}
