"""Pydantic schemas for API request/response models."""
from .vendor_invoice import (
    FIELD_DEFAULTS,
    REQUIRED_FIELDS,
    ValidatedRecord,
    VendorInvoicePayload,
)
from .response import (
    ErrorResponse,
    HealthResponse,
    UpsertResponse,
)

__all__ = [
    # Vendor invoice
    "FIELD_DEFAULTS",
    "REQUIRED_FIELDS",
    "ValidatedRecord",
    "VendorInvoicePayload",
    # Response
    "ErrorResponse",
    "HealthResponse",
    "UpsertResponse",
]
