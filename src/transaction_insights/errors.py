"""Exception types raised by the service.

Each error carries the HTTP status the API layer answers with; the message
becomes the `error` field of the failure envelope.
"""

from __future__ import annotations


class InsightsError(Exception):
    """Base class for expected service failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParamValidationError(InsightsError):
    """A query-string parameter is missing or malformed."""

    status_code = 400


class SeedError(InsightsError):
    """Fetching or loading the upstream transaction data failed."""
