"""Unit tests for the JSON codec adapter."""

import json
from datetime import datetime

import pytest

from registry_client.adapters.codec.json_codec import JsonCodec
from registry_client.core.errors import SerializationError
from registry_client.schemas.documents import DocumentType
from registry_client.schemas.envelope import Envelope


def test_encode_produces_compact_json_without_absent_group() -> None:
    envelope = Envelope(
        product_document={"docId": "42", "ownerInn": "Иванов"},
        signature="c2ln",
        type=DocumentType.LP_INTRODUCE_GOODS,
    )

    body = JsonCodec().encode(envelope)

    assert ", " not in body and ": " not in body
    assert "Иванов" in body
    assert json.loads(body) == {
        "documentFormat": "MANUAL",
        "productDocument": {"docId": "42", "ownerInn": "Иванов"},
        "signature": "c2ln",
        "type": "LP_INTRODUCE_GOODS",
    }


def test_encode_keeps_group_code() -> None:
    envelope = Envelope(
        product_document={},
        product_group=5,
        signature="s",
        type=DocumentType.CROSSBORDER,
    )

    assert json.loads(JsonCodec().encode(envelope))["productGroup"] == 5


@pytest.mark.parametrize(
    "document",
    [
        {"when": datetime(2024, 1, 1)},
        {"nested": {"obj": object()}},
        {"amount": float("nan")},
    ],
)
def test_encode_failure_raises_serialization_error(document: dict) -> None:
    envelope = Envelope(product_document=document, signature="s", type=DocumentType.LK_REMARK)

    with pytest.raises(SerializationError) as exc:
        JsonCodec().encode(envelope)
    assert exc.value.code == "envelope_encode_failed"


def test_decode_success_body() -> None:
    response = JsonCodec().decode('{"value": "abc"}')

    assert response.value == "abc"
    assert response.code is None


def test_decode_error_body_uses_wire_names() -> None:
    response = JsonCodec().decode(
        '{"code": "X", "errorMessage": "m", "description": "d", "extra": 1}'
    )

    assert (response.code, response.error_message, response.description) == ("X", "m", "d")


def test_decode_empty_object() -> None:
    response = JsonCodec().decode("{}")

    assert response.value is None
    assert response.code is None


@pytest.mark.parametrize(
    ("body", "code"),
    [
        ("", "response_decode_failed"),
        ("<html>502</html>", "response_decode_failed"),
        ("[1, 2]", "response_unexpected_shape"),
        ('"abc"', "response_unexpected_shape"),
        ('{"value": {"nested": true}}', "response_unexpected_shape"),
    ],
)
def test_decode_failure_raises_serialization_error(body: str, code: str) -> None:
    with pytest.raises(SerializationError) as exc:
        JsonCodec().decode(body)
    assert exc.value.code == code
