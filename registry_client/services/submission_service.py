"""Document submission service: build envelope, pass the rate gate, send, classify.

This service is the core business logic of the client. It handles:
- Mapping the product group to its registry code
- Envelope construction and encoding
- Rate gate admission (one slot per request that reaches the network)
- The single HTTP call, without retries
- Turning every result or failure into a typed SubmissionOutcome
"""

from __future__ import annotations

import contextvars
import logging
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Mapping

from pydantic import ValidationError

from registry_client.adapters.codec.base import AbstractCodec
from registry_client.adapters.rate_limit.base import AbstractRateGate
from registry_client.adapters.transport.base import AbstractTransport, TransportResponse
from registry_client.core.errors import (
    GateCancelledError,
    NetworkTimeoutError,
    RequestCancelledError,
    SerializationError,
    TransportError,
)
from registry_client.core.logging import submission_context
from registry_client.schemas.documents import DocumentType, ProductDocument, ProductGroup
from registry_client.schemas.envelope import Envelope, RegistryResponse, product_group_code
from registry_client.schemas.outcome import OutcomeKind, SubmissionOutcome

logger = logging.getLogger(__name__)

_CANCEL_POLL_SECONDS = 0.05


def build_envelope(
    document: ProductDocument | Mapping[str, Any],
    group: ProductGroup | None,
    signature: str,
    doc_type: DocumentType,
) -> Envelope:
    """Build the request envelope for one document.

    Args:
        document: Document record or an already JSON-shaped mapping.
        group: Optional product group; omitted from the envelope when None.
        signature: Detached signature of the document.
        doc_type: Registry document type.

    Returns:
        Envelope ready for encoding.

    Raises:
        ValueError: If ``group`` is not a known product group.
        pydantic.ValidationError: If ``doc_type`` or ``signature`` are invalid.
    """
    payload = document if isinstance(document, ProductDocument) else dict(document)
    return Envelope(
        product_document=payload,
        product_group=product_group_code(group),
        signature=signature,
        type=doc_type,
    )


def classify_response(response: RegistryResponse) -> SubmissionOutcome:
    """Turn a decoded registry response into an outcome.

    A ``value`` wins over an error ``code``; a body with neither is empty.
    """
    if response.value is not None:
        return SubmissionOutcome.success(response.value)
    if response.code is not None:
        return SubmissionOutcome.api_rejected(
            code=response.code,
            error_message=response.error_message,
            description=response.description,
        )
    return SubmissionOutcome.failure(
        OutcomeKind.EMPTY_RESPONSE,
        "Registry response holds neither a document id nor an error code",
    )


class SubmissionService:
    """Service submitting documents to the registry under a shared rate gate.

    Safe to call from many threads at once: the gate is the only shared
    mutable state, and the transport's connection pool is thread-safe.

    Attributes:
        gate: Admission controller shared by every caller.
        transport: HTTP transport adapter.
        codec: Envelope/response codec.
        url: Absolute "create document" endpoint.
    """

    def __init__(
        self,
        *,
        gate: AbstractRateGate,
        transport: AbstractTransport,
        codec: AbstractCodec,
        url: str,
        token: str,
        max_in_flight: int | None = None,
    ) -> None:
        """Initialize the service with its collaborators.

        Args:
            gate: Rate gate shared by all submissions.
            transport: Transport used for the POST.
            codec: Codec for the request and response bodies.
            url: Endpoint URL.
            token: Bearer token, assumed valid for the process lifetime.
            max_in_flight: Worker count for cancellable requests; the
                executor default when omitted.
        """
        self.gate = gate
        self.transport = transport
        self.codec = codec
        self.url = url
        self._token = token
        self._executor = ThreadPoolExecutor(
            max_workers=max_in_flight,
            thread_name_prefix="registry-post",
        )

    def close(self) -> None:
        """Stop the request workers and release the transport."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self.transport.close()

    def submit(
        self,
        document: ProductDocument | Mapping[str, Any],
        group: ProductGroup | None,
        signature: str,
        doc_type: DocumentType,
        *,
        cancel: threading.Event | None = None,
    ) -> SubmissionOutcome:
        """Submit one document and report how it went.

        Makes at most one network call and never retries.

        Args:
            document: Document record or JSON-shaped mapping.
            group: Optional product group.
            signature: Detached signature of the document.
            doc_type: Registry document type.
            cancel: Optional event; setting it while the call waits for the
                rate gate or for the registry response yields CANCELLED.

        Returns:
            SubmissionOutcome: Exactly one outcome; failures are never raised.
        """
        with submission_context(str(uuid.uuid4())):
            start = time.perf_counter()
            try:
                outcome = self._submit(document, group, signature, doc_type, cancel)
            except Exception as exc:
                logger.exception("submission.unexpected_error")
                outcome = SubmissionOutcome.failure(
                    OutcomeKind.UNKNOWN_ERROR,
                    f"Unexpected error while submitting: {exc}",
                    cause=exc,
                )
            self._log_outcome(outcome, doc_type, (time.perf_counter() - start) * 1000)
            return outcome

    def _submit(
        self,
        document: ProductDocument | Mapping[str, Any],
        group: ProductGroup | None,
        signature: str,
        doc_type: DocumentType,
        cancel: threading.Event | None,
    ) -> SubmissionOutcome:
        # Encode before touching the gate so a bad payload never costs a slot.
        try:
            envelope = build_envelope(document, group, signature, doc_type)
            body = self.codec.encode(envelope)
        except SerializationError as exc:
            return SubmissionOutcome.failure(OutcomeKind.SERIALIZATION_ERROR, exc.message, cause=exc)
        except (ValidationError, ValueError, TypeError) as exc:
            return SubmissionOutcome.failure(
                OutcomeKind.SERIALIZATION_ERROR,
                f"Envelope could not be built: {exc}",
                cause=exc,
            )

        try:
            self.gate.acquire(cancel)
        except GateCancelledError as exc:
            return SubmissionOutcome.failure(OutcomeKind.CANCELLED, exc.message, cause=exc)

        try:
            response = self._post(body, cancel)
        except RequestCancelledError as exc:
            return SubmissionOutcome.failure(OutcomeKind.CANCELLED, exc.message, cause=exc)
        except NetworkTimeoutError as exc:
            return SubmissionOutcome.failure(OutcomeKind.NETWORK_TIMEOUT, exc.message, cause=exc)
        except TransportError as exc:
            return SubmissionOutcome.failure(OutcomeKind.NETWORK_ERROR, exc.message, cause=exc)

        # The status code is informational: error bodies carry code/errorMessage.
        logger.debug("submission.response", extra={"status_code": response.status_code})

        if cancel is not None and cancel.is_set():
            logger.warning(
                "submission.cancelled_after_response",
                extra={"status_code": response.status_code},
            )
            return SubmissionOutcome.failure(
                OutcomeKind.CANCELLED,
                "Submission was cancelled while the registry call was in flight",
            )

        try:
            parsed = self.codec.decode(response.body)
        except SerializationError as exc:
            return SubmissionOutcome.failure(OutcomeKind.SERIALIZATION_ERROR, exc.message, cause=exc)

        return classify_response(parsed)

    def _post(self, body: str, cancel: threading.Event | None) -> TransportResponse:
        """Send the request, waiting for the response in cancellable steps.

        A cancelled caller stops waiting immediately; the request itself
        runs to completion (or to the transport timeout) on its worker, and
        its slot stays consumed.

        Raises:
            RequestCancelledError: If ``cancel`` is set before the response arrives.
            TransportError: Propagated from the transport.
        """
        if cancel is None:
            return self.transport.post(self.url, body, self._token)

        # Workers keep the caller's submission id on their log records
        context = contextvars.copy_context()
        future = self._executor.submit(context.run, self.transport.post, self.url, body, self._token)
        while True:
            try:
                return future.result(timeout=_CANCEL_POLL_SECONDS)
            except FutureTimeoutError:
                if cancel.is_set():
                    future.cancel()
                    logger.warning("submission.cancelled_in_flight", extra={"url": self.url})
                    raise RequestCancelledError(
                        code="request_cancelled",
                        message="Submission was cancelled while waiting for the registry response",
                        details={"url": self.url},
                    ) from None

    def _log_outcome(self, outcome: SubmissionOutcome, doc_type: DocumentType, duration_ms: float) -> None:
        extra: dict[str, Any] = {
            "outcome": outcome.kind.value,
            "doc_type": getattr(doc_type, "value", doc_type),
            "duration_ms": round(duration_ms, 2),
        }
        if outcome.ok:
            logger.info("submission.accepted", extra={**extra, "document_id": outcome.document_id})
        elif outcome.kind is OutcomeKind.API_REJECTED:
            logger.warning(
                "submission.rejected",
                extra={
                    **extra,
                    "code": outcome.code,
                    "error_message": outcome.error_message,
                    "description": outcome.description,
                },
            )
        elif outcome.kind is not OutcomeKind.UNKNOWN_ERROR:
            logger.warning("submission.failed", extra={**extra, "detail": outcome.detail})
