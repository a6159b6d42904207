"""Application-level exception types.

This module defines the errors raised by adapters and the rate gate. The
submission pipeline catches them and turns each one into a typed
``SubmissionOutcome``; only ``ConfigError`` is expected to reach callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability.

    Fields are optional so each raising site only fills what it knows.
    """

    code: str
    message: str
    hint: str
    status_code: int
    timeout_seconds: float
    limit: int
    window_seconds: float
    url: str
    submission_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for client failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ConfigError(AppError):
    """Raised when construction-time configuration is invalid."""


class SerializationError(AppError):
    """Raised when the envelope cannot be encoded or the response decoded."""


class TransportError(AppError):
    """Raised when the HTTP call fails before a response body is available."""


class NetworkTimeoutError(TransportError):
    """Raised when the registry does not answer within the request timeout."""


class NetworkError(TransportError):
    """Raised on connection, protocol or other transport-level failures."""


class GateCancelledError(AppError):
    """Raised when a caller is cancelled while waiting for a rate-limit slot."""


class RequestCancelledError(AppError):
    """Raised when a caller stops waiting for an in-flight registry response."""
