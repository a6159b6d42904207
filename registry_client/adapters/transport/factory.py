"""Factory for the registry transport and endpoint settings."""

from registry_client.adapters.transport.base import AbstractTransport
from registry_client.adapters.transport.httpx_transport import HttpxTransport
from registry_client.core.config import settings
from registry_client.core.errors import ConfigError

# Path of the "create document" operation, appended to the configured host.
CREATE_DOCUMENT_PATH = "/api/v3/lk/documents/create"


def create_document_url() -> str:
    """Build the absolute endpoint URL from the configured base URL."""
    return settings.registry.base_url.rstrip("/") + CREATE_DOCUMENT_PATH


def require_token(token: str | None = None) -> str:
    """Return the bearer token, falling back to settings only when none is given.

    Raises:
        ConfigError: If the resulting token is missing or empty.
    """
    if token is None:
        token = settings.registry.token
    if not token:
        raise ConfigError(
            code="registry_missing_token",
            message="Registry client requires a bearer token: pass token= or set REGISTRY_TOKEN",
        )
    return token


def create_transport() -> AbstractTransport:
    """Instantiate the transport described by settings.

    Reads configuration from registry_client.core.config.settings.

    Returns:
        AbstractTransport: Configured transport instance.
    """
    return HttpxTransport(timeout_seconds=settings.registry.request_timeout_seconds)
