# konvata/routers/history.py
"""
Price history endpoint for the chart.

GET /api/historical?symbol=BTC[&target=USD][&days=30]

Returns a simulated daily series ending at the current live price; see
konvata.services.price_history. The series is flagged with `_warning` when
no live price was available.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from konvata.dependencies import get_price_history_service
from konvata.middleware.rate_limit import limiter, RATE_LIMIT_HISTORY
from konvata.schemas.errors import ErrorResponse
from konvata.services.constants import DEFAULT_TARGET, HISTORY_MAX_DAYS
from konvata.services.price_history import PriceHistoryService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Price History"],
)


@router.get(
    "/historical",
    summary="Price series for the chart",
    responses={
        400: {"model": ErrorResponse, "description": "Symbol missing"},
        500: {"model": ErrorResponse, "description": "Server configuration error"},
    },
)
@limiter.limit(RATE_LIMIT_HISTORY)
def get_price_history(
        request: Request,  # Required for rate limiting
        symbol: str | None = Query(default=None, description="Asset code, e.g. BTC"),
        target: str = Query(default=DEFAULT_TARGET, description="Quote currency"),
        days: int = Query(default=HISTORY_MAX_DAYS, ge=1, description=f"Days of history (max {HISTORY_MAX_DAYS})"),
        service: PriceHistoryService = Depends(get_price_history_service),
) -> dict[str, Any]:
    history = service.get_history(symbol, target=target, days=days)
    return history.to_schema().to_response()
