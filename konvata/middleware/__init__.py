# konvata/middleware/__init__.py
"""
Middleware components for Konvata.

- Correlation ID tracking for request tracing
- Per-client rate limiting

Usage:
    from konvata.middleware import CorrelationIdMiddleware, limiter

    app.add_middleware(CorrelationIdMiddleware)
    app.state.limiter = limiter
"""

from konvata.middleware.correlation import CorrelationIdMiddleware
from konvata.middleware.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_CONVERT,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_HISTORY,
    RATE_LIMIT_RATES,
)

__all__ = [
    "CorrelationIdMiddleware",
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_CONVERT",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_HISTORY",
    "RATE_LIMIT_RATES",
]
