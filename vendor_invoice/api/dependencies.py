"""FastAPI dependencies for dependency injection."""
from fastapi import Request

from ..config.settings import settings
from ..db.session import ConnectionProvider
from ..services.invoice_service import VendorInvoiceService
from ..services.upsert_engine import UpsertEngine
from ..services.validator import InvoiceValidator


def get_connection_provider(request: Request) -> ConnectionProvider:
    """
    Get the process-wide connection provider built at startup.

    Returns:
        ConnectionProvider stored on the application state
    """
    return request.app.state.provider


def get_invoice_service(request: Request) -> VendorInvoiceService:
    """
    Get a vendor invoice service bound to the app's connection provider.

    Returns:
        VendorInvoiceService instance
    """
    engine = UpsertEngine(get_connection_provider(request), actor_code=settings.ACTOR_CODE)
    validator = getattr(request.app.state, "validator", None) or InvoiceValidator()
    return VendorInvoiceService(
        engine,
        validator=validator,
        retry_duplicate_as_update=settings.RETRY_DUPLICATE_AS_UPDATE,
    )
