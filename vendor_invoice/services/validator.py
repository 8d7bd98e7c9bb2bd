"""Vendor invoice validation."""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .reference_checks import PlaceholderReferenceChecker, ReferenceChecker
from ..errors import ValidationError
from ..schemas.vendor_invoice import (
    AMOUNT_INTEGER_DIGITS,
    AMOUNT_SCALE,
    REQUIRED_FIELDS,
    ValidatedRecord,
    VendorInvoicePayload,
)
from ..utils.logger import get_logger
from ..utils.result import Result

logger = get_logger("services.validator")


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def parse_amount(value: str) -> Optional[Decimal]:
    """
    Parse an invoice amount.

    Returns:
        The amount, or None if it is not a finite number greater than zero
    """
    try:
        amount = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def fits_amount_column(amount: Decimal) -> bool:
    """True if the amount is stored without rounding (at most 16 integer digits and 2 decimals)."""
    if amount.adjusted() >= AMOUNT_INTEGER_DIGITS:
        return False
    return amount == amount.quantize(Decimal(1).scaleb(-AMOUNT_SCALE))


class InvoiceValidator:
    """
    Validates raw vendor invoice input.

    Checks run in a fixed order and the first failing check wins:
    payload shape, required fields, amount, business partner, cost center.
    """

    def __init__(self, reference_checker: Optional[ReferenceChecker] = None):
        self.reference_checker = reference_checker or PlaceholderReferenceChecker()

    def validate(self, raw: Any) -> Result[ValidatedRecord, ValidationError]:
        """
        Validate a decoded JSON request body.

        Args:
            raw: Decoded JSON value (expected to be an object)

        Returns:
            Result holding a ValidatedRecord or the first ValidationError
        """
        if not isinstance(raw, dict):
            return self._reject(ValidationError.invalid_payload("Request body must be a JSON object"))

        try:
            payload = VendorInvoicePayload.model_validate(raw)
        except PydanticValidationError as e:
            bad_fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            return self._reject(
                ValidationError.invalid_payload(f"Invalid field values: {', '.join(bad_fields)}")
            )

        missing = [name for name in REQUIRED_FIELDS if is_blank(getattr(payload, name))]
        if missing:
            return self._reject(ValidationError.missing_fields(missing))

        amount = parse_amount(payload.t_amti)
        if amount is None:
            return self._reject(ValidationError.invalid_amount())
        if not fits_amount_column(amount):
            return self._reject(ValidationError.invalid_amount(
                f"t_amti must have at most {AMOUNT_SCALE} decimal places "
                f"and {AMOUNT_INTEGER_DIGITS} integer digits."
            ))

        if not self.reference_checker.business_partner_exists(payload.t_ifbp):
            return self._reject(ValidationError.unknown_business_partner())

        if not self.reference_checker.cost_center_exists(payload.t_cprj):
            return self._reject(ValidationError.unknown_cost_center())

        return Result.success(
            ValidatedRecord(invoice_id=payload.t_idno, amount=amount, payload=payload)
        )

    def _reject(self, error: ValidationError) -> Result[ValidatedRecord, ValidationError]:
        logger.warning(
            f"Vendor invoice rejected: {error.message}",
            extra={"extra": {"kind": error.kind.value, "fields": list(error.fields)}},
        )
        return Result.failure(error)


_default_validator = InvoiceValidator()


def validate(raw: Any) -> Result[ValidatedRecord, ValidationError]:
    """Validate with the placeholder reference checks."""
    return _default_validator.validate(raw)
