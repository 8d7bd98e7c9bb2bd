"""Vendor invoice Pydantic schemas."""
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VendorInvoicePayload(BaseModel):
    """
    Vendor invoice record as received on the wire.

    Every field is a string, amounts and flags included. Missing or null
    fields take their default; unknown fields are ignored.
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "t_idno": "INV1",
                "t_amti": "150.00",
                "t_orno": "PO9",
                "t_cprj": "CC1",
                "t_ccur": "USD",
                "t_cpay": "WIRE",
                "t_ptyp": "STD",
                "t_ifbp": "BP1",
            }
        },
    )

    t_ninv: str = Field(default="0", description="Invoice sequence number")
    t_ifbp: str = Field(default="", description="Business partner id")
    t_isup: str = Field(default="", description="Supplier id")
    t_invd: str = Field(default="", description="Invoice date (free text)")
    t_ccur: str = Field(default="", description="Currency code")
    t_amth_1: str = Field(default="0", description="Secondary amount 1")
    t_amth_2: str = Field(default="0", description="Secondary amount 2")
    t_amth_3: str = Field(default="0", description="Secondary amount 3")
    t_amti: str = Field(default="", description="Invoice amount")
    t_refr: str = Field(default="", description="Free-text reference")
    t_cpay: str = Field(default="", description="Payment method code")
    t_stin: str = Field(default="1", description="Status indicator")
    t_paym: str = Field(default="", description="Payment reference")
    t_cprj: str = Field(default="", description="Cost center / project code")
    t_dim1: str = Field(default="", description="Dimension 1 (falls back to t_cprj)")
    t_dim2: str = Field(default="", description="Dimension 2")
    t_dim3: str = Field(default="", description="Dimension 3")
    t_dim4: str = Field(default="", description="Dimension 4")
    t_dim5: str = Field(default="", description="Dimension 5")
    t_bkrn: str = Field(default="", description="Bank routing")
    t_bank: str = Field(default="", description="Bank code")
    t_orno: str = Field(default="", description="Order / reference number")
    t_Refcntd: str = Field(default="0", description="Reference counter (debit)")
    t_Refcntu: str = Field(default="0", description="Reference counter (update)")
    t_idno: str = Field(default="", description="Unique invoice identifier")
    t_sync: str = Field(default="2", description="Sync flag")
    t_ptyp: str = Field(default="", description="Payment type")
    t_rrmk: str = Field(default="", description="Remark")

    @model_validator(mode="before")
    @classmethod
    def _apply_wire_defaults(cls, data: Any) -> Any:
        # null means "use the default"; JSON numbers travel as their text form
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = str(value)
            cleaned[key] = value
        return cleaned


class ValidatedRecord(BaseModel):
    """A vendor invoice that passed validation and is safe to persist."""
    model_config = ConfigDict(frozen=True)

    invoice_id: str = Field(..., description="Natural key (t_idno)")
    amount: Decimal = Field(..., gt=0, description="Parsed t_amti")
    payload: VendorInvoicePayload


FIELD_DEFAULTS: dict[str, str] = {
    name: field.default for name, field in VendorInvoicePayload.model_fields.items()
}

REQUIRED_FIELDS: tuple[str, ...] = (
    "t_idno",
    "t_amti",
    "t_orno",
    "t_cprj",
    "t_ccur",
    "t_cpay",
    "t_ptyp",
)

# t_amti is stored as NUMERIC(18, 2)
AMOUNT_SCALE = 2
AMOUNT_INTEGER_DIGITS = 16
