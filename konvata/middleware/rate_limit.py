# konvata/middleware/rate_limit.py
"""
Rate limiting for the public API.

Every /api request can cost one or two calls against the coinlayer plan
quota, so clients are limited per IP using slowapi.

Key by: Client IP address (X-Forwarded-For only from trusted proxies)
Storage: In-memory (single instance)

Usage:
    from konvata.middleware.rate_limit import limiter, RATE_LIMIT_CONVERT

    @router.get("/convert")
    @limiter.limit(RATE_LIMIT_CONVERT)
    def convert(request: Request):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from konvata.config import settings
from konvata.schemas.errors import ErrorResponse
from konvata.services.constants import (
    RATE_LIMIT_CONVERT,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_HISTORY,
    RATE_LIMIT_RATES,
    RATE_LIMIT_RETRY_AFTER_SECONDS,
)

logger = logging.getLogger(__name__)


def _is_trusted_proxy(request: Request) -> bool:
    """Check whether forwarded headers from the immediate client can be trusted."""
    if settings.trust_proxy_headers:
        return True
    return get_remote_address(request) in settings.trusted_proxy_ips


def _get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Forwarded headers are honoured only when the immediate client is a
    trusted proxy, so clients cannot spoof their own X-Forwarded-For.
    """
    if _is_trusted_proxy(request):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First entry is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return a 429 in the standard error shape with a Retry-After header."""
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"

    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content=ErrorResponse.build(
            f"Too many requests. {limit_info}",
            code="RATE_LIMITED",
        ).model_dump(exclude_none=True),
        headers={"Retry-After": str(RATE_LIMIT_RETRY_AFTER_SECONDS)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_CONVERT",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_HISTORY",
    "RATE_LIMIT_RATES",
]
