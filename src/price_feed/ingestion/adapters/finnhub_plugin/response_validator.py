"""
Finnhub Response Validator

Finnhub answers unknown or data-less symbols with HTTP 200 and an all-zero
body, e.g. ``{"c": 0, "d": null, "dp": null, "h": 0, ...}``. A zero (or
missing) current price is therefore absence of data, never a zero-price
quote.
"""

import math
from typing import Any

from price_feed.ingestion.ports.validators import IResponseValidator, ValidationResult

INVALID_STRUCTURE = "INVALID_STRUCTURE"
EMPTY_DATA = "EMPTY_DATA"


class FinnhubResponseValidator(IResponseValidator):
    """Validates Finnhub API response bodies."""

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        if not isinstance(data, dict):
            return ValidationResult(
                is_valid=False,
                error_message=f"Response body must be a JSON object, got {type(data).__name__}",
                error_code=INVALID_STRUCTURE,
            )

        if endpoint == "quote":
            return self._validate_quote(data)
        return ValidationResult(is_valid=True)

    def _validate_quote(self, data: dict) -> ValidationResult:
        price = data.get("c")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            if price is None:
                return ValidationResult(
                    is_valid=False,
                    error_message="No current price in quote",
                    error_code=EMPTY_DATA,
                )
            return ValidationResult(
                is_valid=False,
                error_message=f"Current price is not numeric: {price!r}",
                error_code=INVALID_STRUCTURE,
            )

        # NaN fails the comparison as well
        if not (price > 0 and math.isfinite(price)):
            return ValidationResult(
                is_valid=False,
                error_message=f"No quote data (current price {price})",
                error_code=EMPTY_DATA,
            )

        return ValidationResult(is_valid=True)
