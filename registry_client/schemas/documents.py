"""Pydantic schemas for the documents accepted by the registry.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductGroup(str, Enum):
    """Commodity group a document belongs to."""

    CLOTHES = "CLOTHES"
    SHOES = "SHOES"
    TOBACCO = "TOBACCO"
    PERFUMERY = "PERFUMERY"
    TIRES = "TIRES"
    ELECTRONICS = "ELECTRONICS"
    PHARMA = "PHARMA"
    MILK = "MILK"
    BICYCLE = "BICYCLE"
    WHEELCHAIRS = "WHEELCHAIRS"


class DocumentType(str, Enum):
    """Registry document types."""

    AGGREGATION_DOCUMENT = "AGGREGATION_DOCUMENT"
    DISAGGREGATION_DOCUMENT = "DISAGGREGATION_DOCUMENT"
    REAGGREGATION_DOCUMENT = "REAGGREGATION_DOCUMENT"
    LP_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"
    LP_SHIP_GOODS = "LP_SHIP_GOODS"
    LP_ACCEPT_GOODS = "LP_ACCEPT_GOODS"
    LK_REMARK = "LK_REMARK"
    LK_RECEIPT = "LK_RECEIPT"
    LP_GOODS_IMPORT = "LP_GOODS_IMPORT"
    LP_CANCEL_SHIPMENT = "LP_CANCEL_SHIPMENT"
    LK_KM_CANCELLATION = "LK_KM_CANCELLATION"
    LK_APPLIED_KM_CANCELLATION = "LK_APPLIED_KM_CANCELLATION"
    LK_CONTRACT_COMMISSIONING = "LK_CONTRACT_COMMISSIONING"
    LK_INDI_COMMISSIONING = "LK_INDI_COMMISSIONING"
    LP_SHIP_RECEIPT = "LP_SHIP_RECEIPT"
    OST_DESCRIPTION = "OST_DESCRIPTION"
    CROSSBORDER = "CROSSBORDER"
    LP_INTRODUCE_OST = "LP_INTRODUCE_OST"
    LP_RETURN = "LP_RETURN"
    LP_SHIP_GOODS_CROSSBORDER = "LP_SHIP_GOODS_CROSSBORDER"
    LP_CANCEL_SHIPMENT_CROSSBORDER = "LP_CANCEL_SHIPMENT_CROSSBORDER"


class DocumentFormat(str, Enum):
    MANUAL = "MANUAL"
    XML = "XML"
    CSV = "CSV"


class ProductionType(str, Enum):
    OWN_PRODUCTION = "OWN_PRODUCTION"
    CONTRACT_PRODUCTION = "CONTRACT_PRODUCTION"


class CertificateDocument(str, Enum):
    CONFORMITY_CERTIFICATE = "CONFORMITY_CERTIFICATE"
    CONFORMITY_DECLARATION = "CONFORMITY_DECLARATION"


class _WireModel(BaseModel):
    """Immutable record serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Description(_WireModel):
    participant_inn: str | None = Field(
        default=None,
        description="Taxpayer number of the participant filing the document.",
    )


class Product(_WireModel):
    """A single marked item listed in a document."""

    certificate_document: CertificateDocument | None = None
    certificate_document_date: datetime | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: datetime | None = None
    tnved_code: str | None = Field(
        default=None,
        description="Commodity nomenclature code of the item.",
    )
    uit_code: str | None = Field(
        default=None,
        description="Unique identification code of the item.",
    )


class ProductDocument(_WireModel):
    """Document introducing goods into circulation (and related document kinds)."""

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: DocumentType | None = None
    import_request: bool | None = None
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: datetime | None = None
    production_type: ProductionType | None = None
    products: tuple[Product, ...] = ()
    reg_date: datetime | None = None
    reg_number: str | None = None
