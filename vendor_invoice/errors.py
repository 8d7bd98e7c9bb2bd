"""Error taxonomy for validation, storage and startup failures."""
from dataclasses import dataclass, field
from enum import Enum


class ValidationErrorKind(Enum):
    """Client-fault validation failures (HTTP 400)."""
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    UNKNOWN_BUSINESS_PARTNER = "UNKNOWN_BUSINESS_PARTNER"
    UNKNOWN_COST_CENTER = "UNKNOWN_COST_CENTER"


class StoreErrorKind(Enum):
    """Backend failures (HTTP 500)."""
    CONNECTION_FAILURE = "CONNECTION_FAILURE"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    TIMEOUT = "TIMEOUT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class ValidationError:
    """A rejected vendor invoice payload."""
    kind: ValidationErrorKind
    message: str
    fields: tuple[str, ...] = field(default_factory=tuple)

    status_code = 400

    @classmethod
    def missing_fields(cls, names: list[str]) -> "ValidationError":
        return cls(
            kind=ValidationErrorKind.MISSING_FIELDS,
            message=f"Missing: {', '.join(names)}",
            fields=tuple(names),
        )

    @classmethod
    def invalid_amount(cls, message: str = "t_amti must be > 0.") -> "ValidationError":
        return cls(
            kind=ValidationErrorKind.INVALID_AMOUNT,
            message=message,
            fields=("t_amti",),
        )

    @classmethod
    def unknown_business_partner(cls) -> "ValidationError":
        return cls(
            kind=ValidationErrorKind.UNKNOWN_BUSINESS_PARTNER,
            message="This Business Partner does not exist",
            fields=("t_ifbp",),
        )

    @classmethod
    def unknown_cost_center(cls) -> "ValidationError":
        return cls(
            kind=ValidationErrorKind.UNKNOWN_COST_CENTER,
            message="This Cost Center is not in the ERP",
            fields=("t_cprj",),
        )

    @classmethod
    def invalid_payload(cls, message: str) -> "ValidationError":
        return cls(kind=ValidationErrorKind.INVALID_PAYLOAD, message=message)


@dataclass(frozen=True)
class StoreError:
    """A failed store interaction, carrying the underlying message."""
    kind: StoreErrorKind
    message: str

    status_code = 500

    @property
    def is_duplicate_key(self) -> bool:
        return self.kind is StoreErrorKind.DUPLICATE_KEY


class StartupError(RuntimeError):
    """Raised when the service cannot obtain what it needs to start."""
