"""Registry client facade.

Centralizes client construction (gate, transport, codec, service) so callers
only deal with ``RegistryClient.create_document``.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

from registry_client.adapters.codec.json_codec import JsonCodec
from registry_client.adapters.rate_limit.base import AbstractRateGate
from registry_client.adapters.rate_limit.sliding_window import SlidingWindowRateGate
from registry_client.adapters.transport.base import AbstractTransport
from registry_client.adapters.transport.factory import (
    create_document_url,
    create_transport,
    require_token,
)
from registry_client.core.config import TimeUnit
from registry_client.core.logging import configure_logging
from registry_client.core.rate_limit import get_rate_gate, window_duration
from registry_client.schemas.documents import DocumentType, ProductDocument, ProductGroup
from registry_client.schemas.outcome import SubmissionOutcome
from registry_client.services.submission_service import SubmissionService


class RegistryClient:
    """Thread-safe client for the registry's "create document" operation.

    All threads using one client share its rate gate, so the configured cap
    holds for the client as a whole.

    Example:
        >>> client = RegistryClient.create(TimeUnit.SECONDS, request_limit=5)
        >>> outcome = client.create_document(doc, ProductGroup.SHOES, sig, DocumentType.LP_INTRODUCE_GOODS)
        >>> outcome.document_id if outcome.ok else outcome.kind
    """

    def __init__(
        self,
        gate: AbstractRateGate,
        *,
        token: str | None = None,
        url: str | None = None,
        transport: AbstractTransport | None = None,
    ) -> None:
        """Wire the submission service around an existing gate.

        Args:
            gate: Rate gate to admit calls through.
            token: Bearer token; read from settings when omitted.
            url: Endpoint URL; derived from settings when omitted.
            transport: Transport to use; an httpx transport by default.

        Raises:
            ConfigError: If no token is given or configured.
        """
        self.service = SubmissionService(
            gate=gate,
            transport=create_transport() if transport is None else transport,
            codec=JsonCodec(),
            url=create_document_url() if url is None else url,
            token=require_token(token),
        )

    @classmethod
    def create(
        cls,
        time_unit: TimeUnit | str,
        request_limit: int,
        time_amount: int = 1,
        **kwargs: Any,
    ) -> "RegistryClient":
        """Build a client with its own gate of ``request_limit`` calls per window.

        Args:
            time_unit: Unit of the rolling window.
            request_limit: Maximum calls per window.
            time_amount: Window length in ``time_unit`` (defaults to 1).
            **kwargs: Forwarded to ``__init__`` (token, url, transport).

        Raises:
            ConfigError: If the window or the limit are invalid.
        """
        gate = SlidingWindowRateGate(
            limit=request_limit,
            window_seconds=window_duration(time_unit, time_amount),
        )
        return cls(gate, **kwargs)

    @classmethod
    def from_settings(cls, *, configure_logs: bool = False, **kwargs: Any) -> "RegistryClient":
        """Build a client on the process-wide gate configured by settings.

        Args:
            configure_logs: Also install the ``LOG_*`` configured handler on
                the package logger.
            **kwargs: Forwarded to ``__init__`` (token, url, transport).
        """
        if configure_logs:
            configure_logging()
        return cls(get_rate_gate(), **kwargs)

    @property
    def gate(self) -> AbstractRateGate:
        return self.service.gate

    def create_document(
        self,
        document: ProductDocument | Mapping[str, Any],
        group: ProductGroup | None,
        signature: str,
        doc_type: DocumentType,
        *,
        cancel: threading.Event | None = None,
    ) -> SubmissionOutcome:
        """Create a document in the registry; see ``SubmissionService.submit``."""
        return self.service.submit(document, group, signature, doc_type, cancel=cancel)

    def close(self) -> None:
        self.service.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
