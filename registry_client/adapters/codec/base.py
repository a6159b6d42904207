from abc import ABC, abstractmethod

from registry_client.schemas.envelope import Envelope, RegistryResponse


class AbstractCodec(ABC):
	"""Interface for codecs turning envelopes into request bodies and back."""

	@abstractmethod
	def encode(self, envelope: Envelope) -> str:
		"""Serialize an envelope into a request body.

		Raises:
			SerializationError: If the envelope has no valid wire representation.
		"""
		...

	@abstractmethod
	def decode(self, body: str) -> RegistryResponse:
		"""Parse a response body.

		Raises:
			SerializationError: If the body is not a JSON object of the expected shape.
		"""
		...
