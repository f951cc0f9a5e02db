import logging
from datetime import UTC, datetime

from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def rate_limit_key(client_ip: str, now: datetime) -> str:
    return f"ratelimit:{client_ip}:{now.strftime('%Y%m%d%H%M')}"


def resolve_client_ip(request: Request, trusted_proxies: list[str]) -> str:
    source_ip = request.client.host if request.client else "unknown"
    if source_ip not in trusted_proxies:
        return source_ip
    forwarded_for = request.headers.get("X-Forwarded-For")
    return forwarded_for.split(",")[0].strip() if forwarded_for else source_ip


class RedisRateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed one-minute window per client IP, counted in Redis.

    Requests pass straight through when Redis is not connected.
    """

    def __init__(self, app, requests_per_minute: int = 180):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute

    async def dispatch(self, request: Request, call_next):
        redis: Redis | None = getattr(request.app.state, "redis", None)
        if redis is None:
            return await call_next(request)

        client_ip = resolve_client_ip(request, get_settings().trusted_proxies_list)
        now = datetime.now(UTC)
        key = rate_limit_key(client_ip, now)

        try:
            current = await redis.incr(key)
            if current == 1:
                await redis.expire(key, 70)
        except RedisError:
            logger.exception("Rate limit counter unavailable; allowing request")
            return await call_next(request)

        remaining = max(0, self.requests_per_minute - current)
        reset_ts = int(now.replace(second=0, microsecond=0).timestamp()) + 60

        if current > self.requests_per_minute:
            response = JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded"},
            )
        else:
            response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset_ts)
        return response
