"""Wire-level request envelope and registry response schemas."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from registry_client.schemas.documents import (
    DocumentFormat,
    DocumentType,
    ProductGroup,
)

# Numeric codes the registry expects in the envelope's productGroup field.
PRODUCT_GROUP_CODES: Mapping[ProductGroup, int] = MappingProxyType(
    {
        ProductGroup.CLOTHES: 1,
        ProductGroup.SHOES: 2,
        ProductGroup.TOBACCO: 3,
        ProductGroup.PERFUMERY: 4,
        ProductGroup.TIRES: 5,
        ProductGroup.ELECTRONICS: 6,
        ProductGroup.PHARMA: 7,
        ProductGroup.MILK: 8,
        ProductGroup.BICYCLE: 9,
        ProductGroup.WHEELCHAIRS: 10,
    }
)


def product_group_code(group: ProductGroup | str | None) -> int | None:
    """Map a product group to its registry code (None when no group is given).

    Raises:
        ValueError: If ``group`` is not a known product group.
    """
    if group is None:
        return None
    return PRODUCT_GROUP_CODES[ProductGroup(group)]


class Envelope(BaseModel):
    """Body of ``POST /api/v3/lk/documents/create``.

    ``product_document`` is either a ``ProductDocument`` or an already
    JSON-shaped mapping; it is not validated here. ``product_group`` must be
    absent from the wire form, not null, when no group applies.
    """

    document_format: DocumentFormat = DocumentFormat.MANUAL
    product_document: Any
    product_group: int | None = Field(default=None, ge=1, le=10)
    signature: str
    type: DocumentType

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the mapping sent to the registry, keyed by wire names."""
        document = self.product_document
        if isinstance(document, BaseModel):
            document = document.model_dump(mode="json", by_alias=True)

        data: dict[str, Any] = {
            "documentFormat": self.document_format.value,
            "productDocument": document,
        }
        if self.product_group is not None:
            data["productGroup"] = self.product_group
        data["signature"] = self.signature
        data["type"] = self.type.value
        return data


class RegistryResponse(BaseModel):
    """Decoded response body: either a document id or an error triple."""

    value: str | None = Field(default=None, description="Id of the created document.")
    code: str | None = Field(default=None, description="Registry error code.")
    error_message: str | None = None
    description: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
