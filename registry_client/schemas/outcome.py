"""Typed result of one document submission."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    """Every way a submission attempt can end."""

    SUCCESS = "success"
    API_REJECTED = "api_rejected"
    EMPTY_RESPONSE = "empty_response"
    SERIALIZATION_ERROR = "serialization_error"
    CANCELLED = "cancelled"
    NETWORK_TIMEOUT = "network_timeout"
    NETWORK_ERROR = "network_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of ``submit()``; exactly one is produced per attempt.

    Attributes:
        kind: Which outcome this is.
        document_id: Registry id of the created document (SUCCESS only).
        code: Registry error code (API_REJECTED only).
        error_message: Registry error message (API_REJECTED only).
        description: Registry error description (API_REJECTED only).
        detail: Human-readable cause for local failures.
        cause: The exception behind a local failure, when there is one.
    """

    kind: OutcomeKind
    document_id: str | None = None
    code: str | None = None
    error_message: str | None = None
    description: str | None = None
    detail: str | None = None
    cause: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, document_id: str) -> "SubmissionOutcome":
        return cls(kind=OutcomeKind.SUCCESS, document_id=document_id)

    @classmethod
    def api_rejected(
        cls,
        code: str,
        error_message: str | None,
        description: str | None,
    ) -> "SubmissionOutcome":
        return cls(
            kind=OutcomeKind.API_REJECTED,
            code=code,
            error_message=error_message,
            description=description,
        )

    @classmethod
    def failure(
        cls,
        kind: OutcomeKind,
        detail: str,
        cause: BaseException | None = None,
    ) -> "SubmissionOutcome":
        """Build a local-failure outcome (anything but SUCCESS / API_REJECTED)."""
        if kind in (OutcomeKind.SUCCESS, OutcomeKind.API_REJECTED):
            raise ValueError(f"{kind.value} is not a failure kind")
        return cls(kind=kind, detail=detail, cause=cause)
