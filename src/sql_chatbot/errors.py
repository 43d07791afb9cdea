"""Exception hierarchy shared by both services.

Every error carries the HTTP status it maps to, a short message and optional
details (usually the underlying driver or transport message).
"""

from __future__ import annotations


class ServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ClientInputError(ServiceError):
    """Missing, oversized or otherwise unusable request input."""

    status_code = 400


class SqlValidationError(ServiceError):
    """SQL rejected by the keyword validator."""

    status_code = 400


class DatabaseUnavailableError(ServiceError):
    status_code = 503


class ExecutionError(ServiceError):
    """The database rejected SQL that passed the textual checks."""

    status_code = 500


class UpstreamError(ServiceError):
    """A downstream HTTP collaborator failed, timed out or answered garbage."""

    status_code = 502


class CompletionError(UpstreamError):
    pass


class DataServiceError(UpstreamError):
    pass


class QueryProcessingError(ServiceError):
    status_code = 500

    def __init__(self, details: str | None = None) -> None:
        super().__init__(
            "An error occurred while processing your request. Please try again.",
            details=details,
        )
