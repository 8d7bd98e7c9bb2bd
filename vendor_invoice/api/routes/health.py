"""Health check endpoints."""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from ...schemas.response import HealthResponse
from ...config.settings import settings
from ...db.session import ConnectionProvider
from ..dependencies import get_connection_provider

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(provider: ConnectionProvider = Depends(get_connection_provider)) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status, version, and database connectivity.
    """
    try:
        provider.ping()
        db_status = "connected"
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"

    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc),
        database=db_status
    )


@router.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }
