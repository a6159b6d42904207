"""JSON codec adapter."""

import json

from pydantic import ValidationError

from registry_client.adapters.codec.base import AbstractCodec
from registry_client.core.errors import SerializationError
from registry_client.schemas.envelope import Envelope, RegistryResponse


class JsonCodec(AbstractCodec):
    """Codec producing compact UTF-8 JSON, as the registry expects."""

    def __init__(self, *, ensure_ascii: bool = False) -> None:
        self.ensure_ascii = ensure_ascii

    def encode(self, envelope: Envelope) -> str:
        """Serialize the envelope's wire mapping to JSON.

        Args:
            envelope: Envelope to send.

        Returns:
            str: JSON request body.

        Raises:
            SerializationError: If the document holds values JSON cannot represent.
        """
        try:
            return json.dumps(
                envelope.to_wire(),
                ensure_ascii=self.ensure_ascii,
                separators=(",", ":"),
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                code="envelope_encode_failed",
                message=f"Envelope could not be encoded: {exc}",
            ) from exc

    def decode(self, body: str) -> RegistryResponse:
        """Parse a registry response body.

        Args:
            body: Raw response text.

        Returns:
            RegistryResponse: Parsed response; fields missing from the body are None.

        Raises:
            SerializationError: If the body is not JSON or not a JSON object of
                the expected shape.
        """
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise SerializationError(
                code="response_decode_failed",
                message=f"Registry returned invalid JSON: {exc}",
            ) from exc

        if not isinstance(payload, dict):
            raise SerializationError(
                code="response_unexpected_shape",
                message=f"Registry returned {type(payload).__name__}, expected an object",
            )

        try:
            return RegistryResponse.model_validate(payload)
        except ValidationError as exc:
            raise SerializationError(
                code="response_unexpected_shape",
                message=f"Registry response has unexpected field types: {exc.error_count()} error(s)",
            ) from exc
