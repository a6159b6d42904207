"""Codec adapters - JSON encoding of envelopes and decoding of responses."""

from registry_client.adapters.codec.base import AbstractCodec
from registry_client.adapters.codec.json_codec import JsonCodec

__all__ = [
    "AbstractCodec",
    "JsonCodec",
]
