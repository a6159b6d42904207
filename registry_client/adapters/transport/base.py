from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TransportResponse:
	"""Status and raw body of a completed HTTP exchange."""

	status_code: int
	body: str


class AbstractTransport(ABC):
	"""Interface for transports that POST JSON bodies to the registry."""

	@abstractmethod
	def post(self, url: str, body: str, token: str) -> TransportResponse:
		"""POST a JSON body with bearer authentication.

		Args:
			url: Absolute endpoint URL.
			body: Encoded JSON request body.
			token: Bearer token for the Authorization header.

		Returns:
			TransportResponse: Status code and body text, whatever the status.

		Raises:
			NetworkTimeoutError: If no response arrives within the request timeout.
			NetworkError: On any other transport-level failure.
		"""
		...

	def close(self) -> None:
		"""Release pooled connections (no-op by default)."""
