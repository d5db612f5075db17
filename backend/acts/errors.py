"""Domain errors raised by pre-processors and converted to response envelopes."""
from __future__ import annotations


class ActsError(Exception):
    """Base error carrying the response code of the envelope it maps to."""

    response_code: int = 500

    def __init__(self, message: str, response_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if response_code is not None:
            self.response_code = response_code


class ValidationError(ActsError):
    response_code = 400


class NotFoundError(ActsError):
    response_code = 404


class ConflictError(ActsError):
    """Duplicate record. Surfaced as 400, like any other bad request."""

    response_code = 400
