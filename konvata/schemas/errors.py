# konvata/schemas/errors.py
"""
Pydantic schemas for error responses.

Every failure, whatever its source, is returned as:

    {"success": false, "error": {"message": "...", "code": "..."}}

`code` is optional: provider errors carry the provider's numeric code,
Konvata's own errors carry a short string code.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ErrorInfo(BaseModel):
    """Error payload inside the failure envelope."""

    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    code: str | int | None = Field(
        default=None,
        description="Machine-readable error code (e.g. 'INVALID_AMOUNT' or a provider code)"
    )


class ErrorResponse(BaseModel):
    """
    Standard failure envelope.

    Mirrors the provider's own `success` flag so the frontend can handle
    passthrough and Konvata errors the same way.
    """

    success: Literal[False] = False
    error: ErrorInfo

    @classmethod
    def build(cls, message: str, code: str | int | None = None) -> "ErrorResponse":
        return cls(error=ErrorInfo(message=message, code=code))
