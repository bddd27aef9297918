# konvata/schemas/conversion.py
"""
Pydantic schemas for conversion responses.

Fallback conversions are serialized with these models. Native provider
conversions are passed through untouched and only share the field names.
"""

from pydantic import BaseModel, ConfigDict, Field


class ConversionQuery(BaseModel):
    """The normalized request echoed back in the response."""

    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(..., alias="from", description="Source asset code")
    to_currency: str = Field(..., alias="to", description="Target asset code")
    amount: float = Field(..., gt=0, description="Amount of the source asset")


class ConversionInfo(BaseModel):
    """Rate actually applied to the amount."""

    timestamp: int | None = Field(
        default=None,
        description="Unix time of the live rates used"
    )
    rate: float = Field(..., description="Units of `to` per unit of `from` as applied")


class ConversionResult(BaseModel):
    """
    A conversion computed by Konvata from live rates.

    `result` is `query.amount * info.rate` with no rounding applied;
    rounding for display is left to the client.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    query: ConversionQuery
    info: ConversionInfo
    result: float
    note: str | None = Field(
        default=None,
        description="Provenance marker distinguishing fallback results from native ones"
    )

    def to_response(self) -> dict:
        """Serialize with wire names (`from`/`to`)."""
        return self.model_dump(by_alias=True, exclude_none=True)
