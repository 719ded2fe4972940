"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field


class ReceivedUpdate(BaseModel):
    """Body for marking a milk as received or not."""

    received: bool


class ReasonUpdate(BaseModel):
    """Body for the reason a milk was not received."""

    reason: str


class PriceUpdate(BaseModel):
    """Body for changing one or both daily prices."""

    cow_price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    buffalo_price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
