"""Database module for vendor invoice persistence."""
from .session import ConnectionProvider, build_provider, init_db, resolve_database_url
from .models import Base, NOT_CANCELLED, VendorInvoice

__all__ = [
    "ConnectionProvider",
    "build_provider",
    "init_db",
    "resolve_database_url",
    "Base",
    "NOT_CANCELLED",
    "VendorInvoice",
]
