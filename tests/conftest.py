"""
Shared pytest fixtures for the pharmacy dispensing tests.

Provides catalog snapshots, an in-memory SQLite session seeded with
inventory batches, and a FastAPI TestClient wired to them.
"""

import os
from datetime import date
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URI", "sqlite://")

from hims_pharmacy.db.base import Base  # noqa: E402
from hims_pharmacy.models.pharmacy_inventory import (  # noqa: E402
    InventoryItem,
    InventoryLocation,
    ItemBatch,
)
from hims_pharmacy.services.inventory import StockBatch  # noqa: E402
from hims_pharmacy.services.stock_catalog import InMemoryBatchCatalog  # noqa: E402


# ============================================================================
# CATALOG SNAPSHOTS
# ============================================================================


@pytest.fixture
def scenario_batches():
    """B1: 5 @ 10 exp 2025-01-01, B2: 10 @ 12 exp 2025-06-01."""
    return [
        StockBatch("B1", 5, Decimal("10"), date(2025, 1, 1)),
        StockBatch("B2", 10, Decimal("12"), date(2025, 6, 1)),
    ]


@pytest.fixture
def memory_catalog(scenario_batches):
    return InMemoryBatchCatalog({
        1: scenario_batches,
        2: [],
    })


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """SQLite in-memory session with tables created, seeded with one location."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    db = SessionLocal()

    db.add_all([
        InventoryLocation(id=1, code="MAIN", name="Main Pharmacy"),
        InventoryLocation(id=2, code="WARD", name="Ward Store"),
        InventoryItem(id=1, code="PCM500", name="Paracetamol 500mg"),
    ])
    db.commit()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def add_batch(db_session):
    """Factory inserting an ItemBatch row for item 1."""

    def _add(batch_no, qty, price, expiry, location_id=1, **extra):
        row = ItemBatch(
            item_id=1,
            location_id=location_id,
            batch_no=batch_no,
            current_qty=qty,
            selling_price=Decimal(str(price)),
            expiry_date=expiry,
            **extra,
        )
        db_session.add(row)
        db_session.commit()
        return row

    return _add


# ============================================================================
# API CLIENT
# ============================================================================


@pytest.fixture
def client(memory_catalog) -> Generator[TestClient, None, None]:
    """TestClient whose stock catalog is the in-memory fixture."""
    from hims_pharmacy.api.deps import get_catalog_factory
    from hims_pharmacy.main import app

    app.dependency_overrides[get_catalog_factory] = lambda: (lambda location_id=None: memory_catalog)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sql_client(db_session) -> Generator[TestClient, None, None]:
    """TestClient reading stock from the seeded SQLite session."""
    from hims_pharmacy.db.session import get_db
    from hims_pharmacy.main import app

    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
