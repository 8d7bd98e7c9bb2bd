"""SQLAlchemy models for vendor invoice storage."""
from decimal import Decimal

from sqlalchemy import Column, DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

from ..schemas.vendor_invoice import AMOUNT_INTEGER_DIGITS, AMOUNT_SCALE

Base = declarative_base()

# t_cncl value for a live invoice
NOT_CANCELLED = 2

AMOUNT_PRECISION = AMOUNT_INTEGER_DIGITS + AMOUNT_SCALE
CENTS = Decimal(1).scaleb(-AMOUNT_SCALE)


class ExactAmount(TypeDecorator):
    """
    NUMERIC(18, 2) that never round-trips through float.

    SQLite has no exact decimal storage, so there the amount is kept as
    fixed-point text and read back as a Decimal.
    """
    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(AMOUNT_PRECISION + 2))
        return dialect.type_descriptor(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return format(Decimal(value).quantize(CENTS), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class VendorInvoice(Base):
    """
    Stored vendor invoice, keyed by the external identifier ``t_idno``.

    Business columns mirror the wire record; the remaining columns are
    stamped by the upsert engine and never accepted from input.
    """
    __tablename__ = "vendor_invoice"
    __table_args__ = (
        UniqueConstraint("t_idno", name="uq_vendor_invoice_t_idno"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    t_idno = Column(String(50), nullable=False)

    # Business columns
    t_ninv = Column(String(20), nullable=False, default="0")
    t_ifbp = Column(String(50), nullable=False, default="")
    t_isup = Column(String(50), nullable=False, default="")
    t_invd = Column(String(50), nullable=False, default="")
    t_ccur = Column(String(10), nullable=False, default="")
    t_amth_1 = Column(String(30), nullable=False, default="0")
    t_amth_2 = Column(String(30), nullable=False, default="0")
    t_amth_3 = Column(String(30), nullable=False, default="0")
    t_amti = Column(ExactAmount(), nullable=False)
    t_refr = Column(String(255), nullable=False, default="")
    t_cpay = Column(String(20), nullable=False, default="")
    t_stin = Column(String(10), nullable=False, default="1")
    t_paym = Column(String(50), nullable=False, default="")
    t_cprj = Column(String(50), nullable=False, default="")
    t_dim1 = Column(String(50), nullable=False, default="")
    t_dim2 = Column(String(50), nullable=False, default="")
    t_dim3 = Column(String(50), nullable=False, default="")
    t_dim4 = Column(String(50), nullable=False, default="")
    t_dim5 = Column(String(50), nullable=False, default="")
    t_bkrn = Column(String(50), nullable=False, default="")
    t_bank = Column(String(50), nullable=False, default="")
    t_orno = Column(String(50), nullable=False, default="")
    t_Refcntd = Column(String(20), nullable=False, default="0")
    t_Refcntu = Column(String(20), nullable=False, default="0")
    t_sync = Column(String(10), nullable=False, default="2")
    t_ptyp = Column(String(20), nullable=False, default="")
    t_rrmk = Column(String(255), nullable=False, default="")

    # System columns
    t_srmk = Column(String(255), nullable=False, default=" ")
    t_sydt = Column(DateTime, nullable=False)  # created at
    t_syus = Column(Integer, nullable=False)  # created by
    t_cncl = Column(Integer, nullable=False, default=NOT_CANCELLED)
    t_cndt = Column(DateTime, nullable=False)
    t_updt = Column(Integer, nullable=False)  # updated by
    t_udat = Column(DateTime, nullable=False)  # updated at

    def to_dict(self) -> dict:
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }
