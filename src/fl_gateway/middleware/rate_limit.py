"""Rate limiting middleware — Redis fixed window, per client IP.

  1. Key pattern: "ratelimit:{client_ip}:{minute_window}"
  2. INCR, and EXPIRE on the first hit of the window
  3. Over the limit → 429 RateLimitError (9001) with Retry-After
  4. Real client IP taken from X-Forwarded-For when behind a proxy

Skipped when RATE_LIMIT_ENABLED is off or no Redis client is on app.state.
A Redis outage lets traffic through; limiting is best effort.
"""

import logging
import time

from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from config.settings import settings
from src.fl_common.errors import RateLimitError
from src.fl_common.response import error_response

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
EXEMPT_PATHS = frozenset({"/health"})


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        redis = getattr(request.app.state, "redis", None)
        if not settings.RATE_LIMIT_ENABLED or redis is None or request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        window = int(time.time()) // WINDOW_SECONDS
        key = f"ratelimit:{client_ip(request)}:{window}"
        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, WINDOW_SECONDS)
            if count > settings.RATE_LIMIT_PER_MINUTE:
                ttl = await redis.ttl(key)
                exc = RateLimitError()
                logger.warning("Rate limit exceeded: key=%s count=%d", key, count)
                return JSONResponse(
                    status_code=exc.http_status,
                    content=error_response(
                        exc.code, exc.message, getattr(request.state, "request_id", None)
                    ).model_dump(),
                    headers={"Retry-After": str(ttl if ttl > 0 else WINDOW_SECONDS)},
                )
        except RedisError:
            logger.warning("Rate limiter unavailable, allowing request", exc_info=True)

        return await call_next(request)
