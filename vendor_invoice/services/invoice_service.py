"""Request-level handling of a vendor invoice upsert."""
import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from .upsert_engine import UpsertEngine
from .validator import InvoiceValidator
from ..errors import ValidationError
from ..schemas.response import ErrorResponse, UpsertResponse
from ..utils.logger import get_logger

logger = get_logger("services.invoice_service")


class BodyDecodeError(ValueError):
    """Request body is not valid JSON."""


@dataclass(frozen=True)
class ServiceResponse:
    """Transport-neutral response: HTTP status code and JSON body."""
    status_code: int
    body: dict[str, Any]


def decode_body(body: Optional[Union[str, bytes]]) -> Any:
    """
    Decode a JSON request body; a missing or empty body reads as ``{}``.

    Raises:
        BodyDecodeError: If the body is not valid JSON
    """
    if body is None:
        return {}
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BodyDecodeError(str(e)) from e
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise BodyDecodeError(str(e)) from e


def _error(status_code: int, message: str) -> ServiceResponse:
    return ServiceResponse(status_code, ErrorResponse(error=message).model_dump())


def invalid_body_response() -> ServiceResponse:
    """400 response for a body that cannot be decoded."""
    return _error(ValidationError.status_code, "Request body is not valid JSON")


class VendorInvoiceService:
    """
    Validates a vendor invoice and upserts it.

    Shared by the HTTP route and the Lambda handler so both surfaces map
    outcomes to the same status codes and bodies.
    """

    def __init__(
        self,
        engine: UpsertEngine,
        validator: Optional[InvoiceValidator] = None,
        retry_duplicate_as_update: bool = False,
    ):
        self.engine = engine
        self.validator = validator or InvoiceValidator()
        self.retry_duplicate_as_update = retry_duplicate_as_update

    def handle_body(self, body: Optional[Union[str, bytes]]) -> ServiceResponse:
        """Decode a raw request body and handle it."""
        try:
            raw = decode_body(body)
        except BodyDecodeError as e:
            logger.warning(f"Rejected undecodable request body: {e}")
            return invalid_body_response()
        return self.handle(raw)

    def handle(self, raw: Any) -> ServiceResponse:
        """
        Validate and upsert a decoded request body.

        Args:
            raw: Decoded JSON value

        Returns:
            200 with the action taken, 400 on validation failure,
            500 on store or unexpected failure
        """
        try:
            validated = self.validator.validate(raw)
            if not validated.ok:
                return _error(validated.error.status_code, validated.error.message)

            applied = self.engine.apply(validated.value)
            if (
                not applied.ok
                and applied.error.is_duplicate_key
                and self.retry_duplicate_as_update
            ):
                logger.warning(
                    f"Concurrent insert detected for {validated.value.invoice_id}; retrying as update"
                )
                applied = self.engine.apply(validated.value)

            if not applied.ok:
                return _error(applied.error.status_code, applied.error.message)

            outcome = applied.value
            response = UpsertResponse(
                action=outcome.action.value,
                affected_records=outcome.affected_records,
            )
            return ServiceResponse(200, response.model_dump(by_alias=True))

        except Exception as e:
            logger.exception(f"Unexpected error handling vendor invoice: {e}")
            return _error(500, str(e))
