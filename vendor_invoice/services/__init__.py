"""Services module."""
from .reference_checks import ReferenceChecker, PlaceholderReferenceChecker
from .validator import InvoiceValidator, validate
from .upsert_engine import UpsertAction, UpsertEngine, UpsertOutcome, build_column_values
from .invoice_service import ServiceResponse, VendorInvoiceService, decode_body

__all__ = [
    "ReferenceChecker",
    "PlaceholderReferenceChecker",
    "InvoiceValidator",
    "validate",
    "UpsertAction",
    "UpsertEngine",
    "UpsertOutcome",
    "build_column_values",
    "ServiceResponse",
    "VendorInvoiceService",
    "decode_body",
]
