"""Insert-or-update of vendor invoices keyed by t_idno."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from .validator import is_blank
from ..db.models import NOT_CANCELLED, VendorInvoice
from ..db.session import ConnectionProvider
from ..errors import StoreError, StoreErrorKind
from ..schemas.vendor_invoice import FIELD_DEFAULTS, ValidatedRecord
from ..utils.logger import get_logger
from ..utils.result import Result

logger = get_logger("services.upsert_engine")

vendor_invoice_table = VendorInvoice.__table__

# Driver messages / SQLSTATEs that identify a unique-key violation
_UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate key", "duplicate entry")
_UNIQUE_VIOLATION_CODES = {"23505", "2627", "2601", "1062"}
_TIMEOUT_MARKERS = ("timeout", "timed out", "canceling statement")
_MISSING_OBJECT_MARKERS = ("no such table", "no such column", "relation \"", "invalid object name", "invalid column name")


class UpsertAction(str, Enum):
    """Action taken by an upsert."""
    INSERTED = "INSERTED"
    UPDATED = "UPDATED"


@dataclass(frozen=True)
class UpsertOutcome:
    """Result of a successful upsert; always exactly one row."""
    action: UpsertAction
    invoice_id: str
    affected_records: int = 1


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the table's DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def build_column_values(record: ValidatedRecord) -> dict[str, Any]:
    """
    Map a validated record to business column values.

    Blank fields take their default and a blank ``t_dim1`` is derived from
    ``t_cprj``. The amount is written as a Decimal.

    Args:
        record: Validated vendor invoice

    Returns:
        Column name -> value for every business column, t_idno included
    """
    values: dict[str, Any] = {}
    for name, default in FIELD_DEFAULTS.items():
        value = getattr(record.payload, name)
        values[name] = default if is_blank(value) else value

    if is_blank(values["t_dim1"]):
        values["t_dim1"] = values["t_cprj"]

    values["t_amti"] = record.amount
    return values


def classify_store_error(exc: SQLAlchemyError) -> StoreError:
    """
    Map a SQLAlchemy exception to a StoreError.

    Args:
        exc: Exception raised by SQLAlchemy or the DBAPI driver

    Returns:
        StoreError with the driver's message where available
    """
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    lowered = message.lower()

    if isinstance(exc, IntegrityError):
        code = str(getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None) or "")
        if not code and getattr(orig, "args", None):
            code = str(orig.args[0])
        if code in _UNIQUE_VIOLATION_CODES or any(m in lowered for m in _UNIQUE_VIOLATION_MARKERS):
            return StoreError(StoreErrorKind.DUPLICATE_KEY, message)
        return StoreError(StoreErrorKind.OTHER, message)

    if any(m in lowered for m in _MISSING_OBJECT_MARKERS):
        return StoreError(StoreErrorKind.OTHER, message)

    if isinstance(exc, PoolTimeoutError) or any(m in lowered for m in _TIMEOUT_MARKERS):
        return StoreError(StoreErrorKind.TIMEOUT, message)

    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError)):
        return StoreError(StoreErrorKind.CONNECTION_FAILURE, message)

    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StoreError(StoreErrorKind.CONNECTION_FAILURE, message)

    return StoreError(StoreErrorKind.OTHER, message)


class UpsertEngine:
    """
    Inserts a vendor invoice when its t_idno is unseen, updates it otherwise.

    The existence check and the write are two statements; the unique
    constraint on t_idno rejects the losing insert of a concurrent pair,
    which surfaces as a DUPLICATE_KEY store error. Nothing is retried here.
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        actor_code: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine.

        Args:
            provider: Source of request-scoped transactional connections
            actor_code: Code stamped into the creation/update actor columns
            clock: Returns the timestamp to stamp; defaults to UTC now
        """
        self.provider = provider
        self.actor_code = actor_code
        self.clock = clock or utcnow

    def apply(self, record: ValidatedRecord) -> Result[UpsertOutcome, StoreError]:
        """
        Upsert a validated record.

        Args:
            record: Validated vendor invoice

        Returns:
            Result holding the UpsertOutcome or a StoreError
        """
        values = build_column_values(record)
        now = self.clock()

        try:
            with self.provider.connect() as conn:
                if self._exists(conn, record.invoice_id):
                    self._update(conn, values, now)
                    action = UpsertAction.UPDATED
                else:
                    self._insert(conn, values, now)
                    action = UpsertAction.INSERTED
        except SQLAlchemyError as e:
            error = classify_store_error(e)
            logger.error(
                f"Upsert failed for {record.invoice_id}: {error.message}",
                extra={"extra": {"invoice_id": record.invoice_id, "kind": error.kind.value}},
            )
            return Result.failure(error)

        logger.info(
            f"Vendor invoice {record.invoice_id} {action.value.lower()}",
            extra={"extra": {"invoice_id": record.invoice_id, "action": action.value}},
        )
        return Result.success(UpsertOutcome(action=action, invoice_id=record.invoice_id))

    def _exists(self, conn: Connection, invoice_id: str) -> bool:
        stmt = select(vendor_invoice_table.c.t_idno).where(
            vendor_invoice_table.c.t_idno == invoice_id
        )
        return conn.execute(stmt).first() is not None

    def _insert(self, conn: Connection, values: dict[str, Any], now: datetime) -> None:
        stmt = insert(vendor_invoice_table).values(
            **values,
            t_srmk=" ",
            t_sydt=now,
            t_syus=self.actor_code,
            t_cncl=NOT_CANCELLED,
            t_cndt=now,
            t_updt=self.actor_code,
            t_udat=now,
        )
        conn.execute(stmt)

    def _update(self, conn: Connection, values: dict[str, Any], now: datetime) -> None:
        mutable = {name: value for name, value in values.items() if name != "t_idno"}
        stmt = (
            update(vendor_invoice_table)
            .where(vendor_invoice_table.c.t_idno == values["t_idno"])
            .values(**mutable, t_updt=self.actor_code, t_udat=now)
        )
        conn.execute(stmt)
