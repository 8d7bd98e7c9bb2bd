"""Tests for vendor invoice validation."""
from decimal import Decimal

import pytest

from vendor_invoice.errors import ValidationErrorKind
from vendor_invoice.schemas.vendor_invoice import REQUIRED_FIELDS
from vendor_invoice.services.reference_checks import ReferenceChecker
from vendor_invoice.services.validator import (
    InvoiceValidator,
    fits_amount_column,
    parse_amount,
    validate,
)


class StubReferenceChecker(ReferenceChecker):
    """Reference checker with fixed known partners and cost centers."""

    def __init__(self, partners=(), cost_centers=()):
        self.partners = set(partners)
        self.cost_centers = set(cost_centers)

    def business_partner_exists(self, partner_id: str) -> bool:
        return partner_id in self.partners

    def cost_center_exists(self, cost_center: str) -> bool:
        return cost_center in self.cost_centers


def test_valid_invoice_passes(sample_invoice):
    """Test a complete payload yields a validated record."""
    result = validate(sample_invoice)

    assert result.ok
    assert result.value.invoice_id == "INV1"
    assert result.value.amount == Decimal("150.00")
    assert result.value.payload.t_ccur == "USD"


def test_all_missing_fields_listed():
    """Test every missing required field is named, in field order."""
    result = validate({"t_ifbp": "BP1"})

    assert not result.ok
    assert result.error.kind == ValidationErrorKind.MISSING_FIELDS
    assert result.error.fields == REQUIRED_FIELDS
    assert result.error.message == (
        "Missing: t_idno, t_amti, t_orno, t_cprj, t_ccur, t_cpay, t_ptyp"
    )


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
@pytest.mark.parametrize("blank", [None, "", "   ", "\t"])
def test_blank_required_field_is_missing(sample_invoice, field, blank):
    """Test null, empty and whitespace-only values count as missing."""
    sample_invoice[field] = blank

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.MISSING_FIELDS
    assert result.error.fields == (field,)


def test_absent_required_fields(sample_invoice):
    """Test fields absent from the payload are reported."""
    del sample_invoice["t_orno"]
    del sample_invoice["t_ptyp"]

    result = validate(sample_invoice)

    assert result.error.fields == ("t_orno", "t_ptyp")
    assert result.error.message == "Missing: t_orno, t_ptyp"


@pytest.mark.parametrize("amount", ["0", "0.00", "-5", "abc", "12,50", "NaN", "Infinity", "1e"])
def test_invalid_amount(sample_invoice, amount):
    """Test non-numeric and non-positive amounts are rejected."""
    sample_invoice["t_amti"] = amount

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.INVALID_AMOUNT
    assert result.error.message == "t_amti must be > 0."


def test_missing_fields_checked_before_amount(sample_invoice):
    """Test required-field failure wins over an invalid amount."""
    sample_invoice["t_amti"] = "-1"
    sample_invoice["t_ccur"] = ""

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.MISSING_FIELDS
    assert result.error.fields == ("t_ccur",)


def test_amount_checked_before_business_partner(sample_invoice):
    """Test an invalid amount wins over an unknown business partner."""
    sample_invoice["t_amti"] = "0"
    sample_invoice["t_ifbp"] = ""

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.INVALID_AMOUNT


@pytest.mark.parametrize("partner", [None, "", "  "])
def test_blank_business_partner(sample_invoice, partner):
    """Test placeholder business partner check rejects blanks."""
    sample_invoice["t_ifbp"] = partner

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.UNKNOWN_BUSINESS_PARTNER
    assert result.error.message == "This Business Partner does not exist"


def test_pluggable_reference_checks(sample_invoice):
    """Test a custom reference checker drives partner and cost center checks."""
    validator = InvoiceValidator(StubReferenceChecker(partners={"BP1"}, cost_centers={"CC9"}))

    result = validator.validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.UNKNOWN_COST_CENTER
    assert result.error.message == "This Cost Center is not in the ERP"

    sample_invoice["t_cprj"] = "CC9"
    assert validator.validate(sample_invoice).ok


def test_business_partner_checked_before_cost_center(sample_invoice):
    """Test partner failure wins when both reference checks fail."""
    validator = InvoiceValidator(StubReferenceChecker())

    result = validator.validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.UNKNOWN_BUSINESS_PARTNER


@pytest.mark.parametrize("raw", [[], "INV1", 42, None])
def test_non_object_payload(raw):
    """Test a body that is not a JSON object is rejected."""
    result = validate(raw)

    assert result.error.kind == ValidationErrorKind.INVALID_PAYLOAD


def test_non_scalar_field_value(sample_invoice):
    """Test object, array and boolean field values are rejected."""
    sample_invoice["t_refr"] = {"nested": True}
    sample_invoice["t_sync"] = True

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.INVALID_PAYLOAD
    assert result.error.message == "Invalid field values: t_refr, t_sync"


def test_numeric_amount_accepted(sample_invoice):
    """Test a JSON number amount is read as its text form."""
    sample_invoice["t_amti"] = 99.5

    result = validate(sample_invoice)

    assert result.ok
    assert result.value.amount == Decimal("99.5")
    assert result.value.payload.t_amti == "99.5"


def test_parse_amount():
    """Test amount parsing edge cases."""
    assert parse_amount(" 150.00 ") == Decimal("150.00")
    assert parse_amount("1e3") == Decimal("1000")
    assert parse_amount("0.01") == Decimal("0.01")
    assert parse_amount("") is None
    assert parse_amount("-0.01") is None


@pytest.mark.parametrize("amount", ["0.001", "99.999", "150.005", "12345678901234567", "1e16"])
def test_amount_outside_column_precision(sample_invoice, amount):
    """Test amounts that NUMERIC(18, 2) would round are rejected."""
    sample_invoice["t_amti"] = amount

    result = validate(sample_invoice)

    assert result.error.kind == ValidationErrorKind.INVALID_AMOUNT
    assert result.error.fields == ("t_amti",)
    assert result.error.message == (
        "t_amti must have at most 2 decimal places and 16 integer digits."
    )


@pytest.mark.parametrize("amount", ["150.000", "1234567890123456.78", "9999999999999999.99", "1e3"])
def test_amount_within_column_precision(sample_invoice, amount):
    """Test trailing zeros and 16 integer digits are accepted unchanged."""
    sample_invoice["t_amti"] = amount

    result = validate(sample_invoice)

    assert result.ok
    assert result.value.amount == Decimal(amount)


def test_fits_amount_column():
    """Test the scale and integer digit limits of the amount column."""
    assert fits_amount_column(Decimal("0.01"))
    assert fits_amount_column(Decimal("12.50"))
    assert fits_amount_column(Decimal("12.500"))
    assert fits_amount_column(Decimal("9999999999999999.99"))
    assert not fits_amount_column(Decimal("0.001"))
    assert not fits_amount_column(Decimal("10000000000000000"))
    assert not fits_amount_column(Decimal("1.23456789012345678901234567890"))
