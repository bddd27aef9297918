# konvata/schemas/history.py
"""Pydantic schemas for the price history (chart) endpoint."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """One day of the chart series."""

    date: date
    price: float


class PriceHistoryResponse(BaseModel):
    """
    Price series for a single asset.

    `warning` is serialized as `_warning` and is present only when the
    series was generated without a live price.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: list[PricePoint] = Field(default_factory=list)
    warning: str | None = Field(default=None, alias="_warning")

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
