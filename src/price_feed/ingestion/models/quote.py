"""Provider-native quote model.

A Quote lives for exactly one derivation and is never persisted in this
shape. Fields are populated from the provider's single-letter keys:

    {"c": 50000, "d": 980, "dp": 2.0, "h": 51000, "l": 49000,
     "o": 49500, "pc": 49020, "t": 1718000000}
"""

from pydantic import BaseModel, Field, field_validator


class Quote(BaseModel):
    """Point-in-time top-of-book quote."""

    current_price: float = Field(..., alias="c")
    change: float | None = Field(None, alias="d")
    percent_change: float | None = Field(None, alias="dp")
    high: float = Field(0.0, alias="h")
    low: float = Field(0.0, alias="l")
    open: float = Field(0.0, alias="o")
    previous_close: float = Field(0.0, alias="pc")
    timestamp: int = Field(0, alias="t", description="Provider epoch seconds")

    @field_validator("high", "low", "open", "previous_close", "timestamp", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"
