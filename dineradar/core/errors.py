"""Exception types shared across the search pipeline."""

from __future__ import annotations

from typing import Dict, List, Optional


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


class GooglePlacesError(RuntimeError):
    """Raised when a Google Maps API returns a non-successful response."""


class UpstreamError(RuntimeError):
    """Raised when a provider call fails during a search or resolve.

    ``operation`` names the pipeline step that failed so callers can log it
    without digging through the exception chain.
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


class InvalidInput(ValueError):
    """Raised when a request body fails shape or range validation."""

    def __init__(
        self,
        field_errors: Dict[str, List[str]],
        form_errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__("invalid input: " + ", ".join(sorted(field_errors)) if field_errors else "invalid input")
        self.field_errors = field_errors
        self.form_errors = form_errors or []

    def detail(self) -> Dict[str, object]:
        return {"formErrors": list(self.form_errors), "fieldErrors": dict(self.field_errors)}
