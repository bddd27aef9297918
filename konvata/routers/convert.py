# konvata/routers/convert.py
"""
Conversion endpoint.

GET /api/convert?from=BTC&to=ETH&amount=1[&date=YYYY-MM-DD]

Returns the provider's native conversion when the plan allows it, else a
result computed from live USD rates (marked with a `note`). The branch taken
is reported in the X-Conversion-Path header.

Errors (mapped by the global handlers in main.py):
- 400: missing params, invalid amount/date, no live rate for `from`
- 402: pair cannot be resolved without a paid plan
- 500: provider or internal failure
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from konvata.dependencies import get_conversion_resolver
from konvata.middleware.rate_limit import limiter, RATE_LIMIT_CONVERT
from konvata.schemas.errors import ErrorResponse
from konvata.services.conversion import ConversionResolver

logger = logging.getLogger(__name__)

CONVERSION_PATH_HEADER = "X-Conversion-Path"

router = APIRouter(
    prefix="/api",
    tags=["Conversion"],
)


@router.get(
    "/convert",
    summary="Convert an amount between two assets",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid parameters"},
        402: {"model": ErrorResponse, "description": "Conversion not available on this plan"},
        500: {"model": ErrorResponse, "description": "Provider or internal error"},
    },
)
@limiter.limit(RATE_LIMIT_CONVERT)
def convert(
        request: Request,  # Required for rate limiting
        from_currency: str | None = Query(default=None, alias="from", description="Source asset, e.g. BTC"),
        to_currency: str | None = Query(default=None, alias="to", description="Target asset, e.g. USD"),
        amount: str | None = Query(default=None, description="Amount of the source asset (> 0)"),
        date: str | None = Query(default=None, description="Historical date, YYYY-MM-DD"),
        resolver: ConversionResolver = Depends(get_conversion_resolver),
) -> JSONResponse:
    """
    Convert `amount` of `from` into `to`.

    Parameters are taken as raw strings so that missing and malformed values
    are reported with Konvata's own error messages rather than a 422.
    """
    outcome = resolver.resolve(from_currency, to_currency, amount, date)
    return JSONResponse(
        content=outcome.body,
        headers={CONVERSION_PATH_HEADER: outcome.path.value},
    )
