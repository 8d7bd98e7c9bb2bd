"""FastAPI main application entry point."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config.settings import settings
from .db.session import ConnectionProvider, build_provider, init_db
from .api.routes import health, vendor_invoice
from .services.validator import InvoiceValidator
from .utils.logger import get_logger

logger = get_logger("main")


def create_app(
    provider: Optional[ConnectionProvider] = None,
    validator: Optional[InvoiceValidator] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        provider: Connection provider to use; built from settings at
            startup when omitted. A failure to build it aborts startup.
        validator: Validator with custom reference checks; placeholder
            checks when omitted

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        logger.info("Starting Vendor Invoice Upsert Service")
        app.state.provider = provider or build_provider(settings)
        init_db(app.state.provider, settings)
        logger.info("Database initialized")

        yield

        # Shutdown
        logger.info("Shutting down Vendor Invoice Upsert Service")
        if provider is None:
            app.state.provider.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
        Vendor Invoice Upsert API

        Validates a vendor invoice record and inserts or updates it in the
        vendor_invoice table, keyed by the external invoice identifier t_idno.
        """,
        lifespan=lifespan,
    )
    app.state.validator = validator

    # Include routers
    app.include_router(health.router)
    app.include_router(vendor_invoice.router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vendor_invoice.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG
    )
