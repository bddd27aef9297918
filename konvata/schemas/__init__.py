# konvata/schemas/__init__.py
"""
Pydantic schemas for Konvata responses.

Provider envelopes for live/historical/list calls are passed through as-is;
only responses Konvata builds itself have schemas here.
"""

from konvata.schemas.conversion import (
    ConversionInfo,
    ConversionQuery,
    ConversionResult,
)
from konvata.schemas.errors import ErrorInfo, ErrorResponse
from konvata.schemas.history import PricePoint, PriceHistoryResponse

__all__ = [
    # Conversion
    "ConversionQuery",
    "ConversionInfo",
    "ConversionResult",
    # History
    "PricePoint",
    "PriceHistoryResponse",
    # Errors
    "ErrorInfo",
    "ErrorResponse",
]
