"""Response validation abstractions."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class ValidationResult:
    """Result of response validation."""

    is_valid: bool
    error_message: str | None = None
    error_code: str | None = None


class IResponseValidator(Protocol):
    """Abstraction for response validation.

    Single Responsibility: Decide whether a decoded body carries usable data.
    Does NOT handle HTTP status codes.
    """

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        """Validate response data structure and required fields."""
        ...
