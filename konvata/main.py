# konvata/main.py
"""
FastAPI application entry point.

This file:
- Configures application-wide logging
- Creates the FastAPI application
- Registers global exception handlers
- Registers all routers
- Defines global endpoints (health checks)

Run locally with:
    uvicorn konvata.main:app --reload
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from konvata import __version__
from konvata.config import settings
from konvata.dependencies import get_rate_provider_client
from konvata.middleware import (
    CorrelationIdMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_HEALTH,
)
from konvata.routers import convert_router, history_router, rates_router
from konvata.schemas.errors import ErrorResponse
from konvata.services.exceptions import (
    ServiceError,
    ValidationError,
    RateProviderError,
    ProviderConfigurationError,
    ConversionError,
    NoLiveRateError,
    UnsupportedConversionError,
)
from konvata.services.rates.client import RateProviderClient
from konvata.utils import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# LOGGING SETUP (must be before app creation)
# =============================================================================

setup_logging()

# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Live and historical cryptocurrency rates and conversion",
    version=__version__,
    debug=settings.debug,
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=["X-Correlation-ID", "X-Conversion-Path"],
)


# =============================================================================
# MIDDLEWARE (order matters: last added = first executed)
# =============================================================================

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
# Every failure leaves the API as {"success": false, "error": {...}}.
# Starlette picks the handler of the most specific matching class, so
# subclasses registered here win over their bases.
# =============================================================================

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


def _error_response(status_code: int, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.build(exc.message, code=exc.code).model_dump(exclude_none=True),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle missing/invalid request parameters (400)."""
    logger.warning(f"Validation error on {request.url.path}: {exc}")
    return _error_response(400, exc)


@app.exception_handler(NoLiveRateError)
async def no_live_rate_handler(request: Request, exc: NoLiveRateError) -> JSONResponse:
    """Handle a fallback lookup that found no rate for the source asset (400)."""
    logger.warning(f"No live rate: {exc.symbol}")
    return _error_response(400, exc)


@app.exception_handler(UnsupportedConversionError)
async def unsupported_conversion_handler(
    request: Request, exc: UnsupportedConversionError
) -> JSONResponse:
    """Handle conversions that need a paid plan (402)."""
    logger.warning(f"Unsupported conversion: {exc.from_currency}->{exc.to_currency}")
    return _error_response(402, exc)


@app.exception_handler(ConversionError)
async def conversion_error_handler(request: Request, exc: ConversionError) -> JSONResponse:
    """Handle other conversion errors (400)."""
    logger.warning(f"Conversion error: {exc}")
    return _error_response(400, exc)


@app.exception_handler(ProviderConfigurationError)
async def provider_configuration_handler(
    request: Request, exc: ProviderConfigurationError
) -> JSONResponse:
    """Handle a missing provider credential (500)."""
    logger.error(f"Provider not configured: {exc.env_var} is missing")
    return _error_response(500, exc)


@app.exception_handler(RateProviderError)
async def rate_provider_error_handler(request: Request, exc: RateProviderError) -> JSONResponse:
    """Handle provider failures: network, HTTP status or success=false (500)."""
    logger.error(f"Rate provider error on {request.url.path}: {exc}")
    return _error_response(500, exc)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle generic service errors (500)."""
    logger.error(f"Service error: {exc}")
    return _error_response(500, exc)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle all HTTPExceptions with consistent error format.

    Converts FastAPI's default {"detail": "..."} format (e.g. unknown routes)
    to the standard error envelope.
    """
    error_codes = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        429: "RATE_LIMITED",
        500: "INTERNAL_SERVER_ERROR",
        503: "SERVICE_UNAVAILABLE",
    }

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse.build(
            str(exc.detail) if exc.detail else "An error occurred",
            code=error_codes.get(exc.status_code, "HTTP_ERROR"),
        ).model_dump(exclude_none=True),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI parameter validation (e.g. non-integer `days`) (422)."""
    fields = ", ".join(
        ".".join(str(loc) for loc in error["loc"]) for error in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content=ErrorResponse.build(
            f"Request validation failed: {fields}",
            code="VALIDATION_ERROR",
        ).model_dump(exclude_none=True),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the traceback, return a generic 500."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse.build(
            "Internal server error",
            code="INTERNAL_SERVER_ERROR",
        ).model_dump(exclude_none=True),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(convert_router)  # /api/convert
app.include_router(rates_router)  # /api/live, /api/historical/{date}, /api/symbols
app.include_router(history_router)  # /api/historical


# =============================================================================
# GLOBAL ENDPOINTS
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    """API root - returns basic application info."""
    return {
        "message": f"Welcome to {settings.app_name}!",
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(
        request: Request,
        client: RateProviderClient = Depends(get_rate_provider_client),
):
    """
    Health check endpoint.

    Does not call the provider (that would spend plan quota); it reports
    whether the credential is configured and how the response cache is doing.

    **Response Status Codes:**
    - 200: Provider credential configured
    - 503: Credential missing - every rate endpoint would fail
    """
    checks = {}
    healthy = client.is_configured

    checks["rate_provider"] = {
        "status": "healthy" if healthy else "unhealthy",
        "critical": True,
        "provider": client.name,
        "configured": healthy,
    }

    cache = client.cache
    if cache is not None and cache.enabled:
        stats = cache.stats
        checks["response_cache"] = {
            "status": "healthy",
            "critical": False,
            "entries": stats.entries,
            "hits": stats.hits,
            "misses": stats.misses,
        }
    else:
        checks["response_cache"] = {
            "status": "disabled",
            "critical": False,
        }

    response_data = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": checks,
    }

    if not healthy:
        return JSONResponse(status_code=503, content=response_data)

    return response_data


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """Liveness probe: 200 whenever the process is serving requests."""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(
        request: Request,
        client: RateProviderClient = Depends(get_rate_provider_client),
):
    """Readiness probe: 503 until a provider credential is configured."""
    if client.is_configured:
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "not_ready",
            "error": "Rate provider credential missing",
        },
    )
