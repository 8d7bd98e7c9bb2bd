"""API module for FastAPI routes."""
from .routes import health, vendor_invoice

__all__ = ["health", "vendor_invoice"]
