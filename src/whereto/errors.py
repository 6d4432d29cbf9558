"""Domain exceptions mapped to HTTP responses by the global error handler."""

from __future__ import annotations


class WhereToError(Exception):
    """Base class for errors that carry an HTTP status for the API layer."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(WhereToError):
    """Malformed or out-of-range input."""

    status_code = 400


class ForbiddenError(WhereToError):
    """Authenticated but not entitled (not the owner, not a friend, ...)."""

    status_code = 403


class NotFoundError(WhereToError):
    status_code = 404


class ConflictError(WhereToError):
    """Uniqueness violation surfaced to the caller."""

    status_code = 409


class UpstreamError(WhereToError):
    """An external API answered with a non-success status; the status is propagated."""

    status_code = 502
