"""httpx transport adapter."""

import logging

import httpx

from registry_client.adapters.transport.base import AbstractTransport, TransportResponse
from registry_client.core.errors import NetworkError, NetworkTimeoutError

logger = logging.getLogger(__name__)


class HttpxTransport(AbstractTransport):
    """Transport backed by a pooled, thread-safe ``httpx.Client``.

    One instance is meant to be shared by every caller of a client, so
    concurrent submissions reuse the same connection pool.
    """

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Timeout applied to connect, read, write and pool waits.
            client: Optional preconfigured client (tests pass one built on
                ``httpx.MockTransport``).
        """
        self.timeout_seconds = timeout_seconds
        self.client = client or httpx.Client(timeout=timeout_seconds)

    def post(self, url: str, body: str, token: str) -> TransportResponse:
        """POST the body and return status and text of the response.

        Raises:
            NetworkTimeoutError: If the request times out.
            NetworkError: On connection or protocol errors.
        """
        headers = {
            "content-type": "application/json",
            "Authorization": f"Bearer {token}",
        }

        try:
            response = self.client.post(
                url,
                content=body.encode("utf-8"),
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise NetworkTimeoutError(
                code="registry_timeout",
                message=f"Registry did not respond within {self.timeout_seconds}s",
                details={"timeout_seconds": self.timeout_seconds, "url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                code="registry_unreachable",
                message=f"Registry request failed: {exc}",
                details={"url": url},
            ) from exc

        logger.debug(
            "transport.response",
            extra={"status_code": response.status_code, "url": url},
        )
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.client.close()
