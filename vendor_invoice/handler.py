"""AWS Lambda entry point for API Gateway proxy events."""
import base64
import binascii
import json
from typing import Any, Optional, Union

from .config.settings import settings
from .db.session import build_provider, init_db
from .services.invoice_service import VendorInvoiceService, invalid_body_response
from .services.upsert_engine import UpsertEngine
from .utils.logger import get_logger

logger = get_logger("handler")

# Cold-start initialization: a StartupError here fails the container's init
# phase and no request is ever served with a missing connection descriptor.
provider = build_provider(settings)
init_db(provider, settings)
service = VendorInvoiceService(
    UpsertEngine(provider, actor_code=settings.ACTOR_CODE),
    retry_duplicate_as_update=settings.RETRY_DUPLICATE_AS_UPDATE,
)


def _event_body(event: dict[str, Any]) -> Optional[Union[str, bytes]]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True)
    return body


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Handle an API Gateway proxy request carrying one vendor invoice.

    Returns:
        API Gateway proxy response with a JSON body
    """
    try:
        body = _event_body(event or {})
    except binascii.Error as e:
        logger.warning(f"Rejected undecodable base64 body: {e}")
        result = invalid_body_response()
    else:
        result = service.handle_body(body)

    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(result.body),
    }
