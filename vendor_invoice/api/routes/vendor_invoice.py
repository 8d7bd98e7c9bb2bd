"""Vendor invoice upsert endpoint."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...schemas.response import ErrorResponse, UpsertResponse
from ...services.invoice_service import VendorInvoiceService
from ..dependencies import get_invoice_service
from ...utils.logger import get_logger

router = APIRouter(prefix="/vendor-invoice", tags=["Vendor Invoice"])
logger = get_logger("api.vendor_invoice")


@router.post(
    "",
    response_model=UpsertResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failure"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def upsert_vendor_invoice(
    request: Request,
    service: VendorInvoiceService = Depends(get_invoice_service),
) -> JSONResponse:
    """
    Insert or update a vendor invoice keyed by ``t_idno``.

    Body is a JSON object of string fields; missing optional fields take
    their defaults and unknown fields are ignored.
    """
    body = await request.body()
    result = service.handle_body(body)
    logger.info(f"Vendor invoice request handled with status {result.status_code}")
    return JSONResponse(status_code=result.status_code, content=result.body)
