"""Pytest configuration and fixtures."""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from vendor_invoice.db.session import ConnectionProvider, init_db
from vendor_invoice.main import create_app
from vendor_invoice.services.upsert_engine import UpsertEngine
from vendor_invoice.services.validator import validate


@pytest.fixture
def sample_invoice() -> dict:
    """Valid vendor invoice payload with only the required fields."""
    return {
        "t_idno": "INV1",
        "t_amti": "150.00",
        "t_orno": "PO9",
        "t_cprj": "CC1",
        "t_ccur": "USD",
        "t_cpay": "WIRE",
        "t_ptyp": "STD",
        "t_ifbp": "BP1",
    }


@pytest.fixture
def full_invoice(sample_invoice) -> dict:
    """Valid vendor invoice payload with optional fields populated."""
    return {
        **sample_invoice,
        "t_idno": "INV-FULL-001",
        "t_ninv": "7",
        "t_isup": "SUP-42",
        "t_invd": "2026-03-01",
        "t_amth_1": "10.50",
        "t_refr": "March services",
        "t_stin": "3",
        "t_paym": "PAY-9",
        "t_dim1": "DIM-A",
        "t_dim2": "DIM-B",
        "t_bkrn": "021000021",
        "t_bank": "CHASE",
        "t_Refcntd": "4",
        "t_Refcntu": "5",
        "t_sync": "1",
        "t_rrmk": "urgent",
    }


@pytest.fixture
def provider(tmp_path) -> ConnectionProvider:
    """Connection provider over a fresh file-backed SQLite database."""
    provider = ConnectionProvider.from_url(f"sqlite:///{tmp_path / 'vendor_invoice.db'}")
    init_db(provider)
    yield provider
    provider.dispose()


@pytest.fixture
def clock():
    """Controllable clock for the upsert engine."""

    class Clock:
        def __init__(self):
            self.now = datetime(2026, 1, 5, 9, 30, 0)

        def __call__(self) -> datetime:
            return self.now

    return Clock()


@pytest.fixture
def engine(provider, clock) -> UpsertEngine:
    """UpsertEngine bound to the test database."""
    return UpsertEngine(provider, actor_code=2, clock=clock)


@pytest.fixture
def validated(sample_invoice):
    """Validated record for the sample invoice."""
    return validate(sample_invoice).value


@pytest.fixture
def client(provider):
    """HTTP client for an app wired to the test database."""
    with TestClient(create_app(provider=provider)) as test_client:
        yield test_client
