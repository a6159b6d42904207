"""Transport adapter layer - abstracts over the HTTP client used to reach the registry."""

from registry_client.adapters.transport.base import AbstractTransport, TransportResponse
from registry_client.adapters.transport.factory import create_transport
from registry_client.adapters.transport.httpx_transport import HttpxTransport

__all__ = [
    "AbstractTransport",
    "HttpxTransport",
    "TransportResponse",
    "create_transport",
]
