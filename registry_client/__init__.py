"""Rate-limited client for the document registry's "create document" API."""

from registry_client.client import RegistryClient
from registry_client.core.config import TimeUnit
from registry_client.schemas.documents import DocumentType, ProductDocument, ProductGroup
from registry_client.schemas.outcome import OutcomeKind, SubmissionOutcome

__all__ = [
    "DocumentType",
    "OutcomeKind",
    "ProductDocument",
    "ProductGroup",
    "RegistryClient",
    "SubmissionOutcome",
    "TimeUnit",
]
