# konvata/routers/rates.py
"""
Rate passthrough endpoints.

These return the provider's envelope unchanged; Konvata only adds the
access key, the response cache and its error format.

- GET /api/live              live rates
- GET /api/historical/{date} rates for a past date
- GET /api/symbols           supported symbols
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from konvata.dependencies import get_rate_provider_client
from konvata.middleware.rate_limit import limiter, RATE_LIMIT_RATES
from konvata.schemas.errors import ErrorResponse
from konvata.services.constants import DEFAULT_TARGET
from konvata.services.conversion import validate_date
from konvata.services.rates.client import RateProviderClient

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Rates"],
    responses={500: {"model": ErrorResponse, "description": "Provider or internal error"}},
)


@router.get("/live", summary="Live rates")
@limiter.limit(RATE_LIMIT_RATES)
def get_live_rates(
        request: Request,  # Required for rate limiting
        target: str | None = Query(default=None, description="Quote currency, e.g. EUR"),
        symbols: str | None = Query(default=None, description="Comma-separated asset codes"),
        expand: str | None = Query(default=None, description="1 to include market metadata"),
        client: RateProviderClient = Depends(get_rate_provider_client),
) -> dict[str, Any]:
    return client.live(target=target, symbols=symbols, expand=expand)


@router.get(
    "/historical/{date}",
    summary="Rates for a past date",
    responses={400: {"model": ErrorResponse, "description": "Malformed date"}},
)
@limiter.limit(RATE_LIMIT_RATES)
def get_historical_rates(
        request: Request,  # Required for rate limiting
        date: str,
        target: str = Query(default=DEFAULT_TARGET, description="Quote currency"),
        symbols: str | None = Query(default=None, description="Comma-separated asset codes"),
        expand: str | None = Query(default=None, description="1 to include market metadata"),
        client: RateProviderClient = Depends(get_rate_provider_client),
) -> dict[str, Any]:
    """Rates published on `date` (YYYY-MM-DD)."""
    validate_date(date)
    return client.historical(date, target=target, symbols=symbols, expand=expand)


@router.get("/symbols", summary="Supported symbols")
@limiter.limit(RATE_LIMIT_RATES)
def get_symbols(
        request: Request,  # Required for rate limiting
        client: RateProviderClient = Depends(get_rate_provider_client),
) -> dict[str, Any]:
    return client.list_symbols()
