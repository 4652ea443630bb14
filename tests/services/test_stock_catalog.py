"""
Tests for the batch catalogs (in-memory fixture and SQL-backed).
"""

from datetime import date
from decimal import Decimal

import pytest

from hims_pharmacy.services.errors import InvalidInput
from hims_pharmacy.services.inventory import StockBatch
from hims_pharmacy.services.pharmacy_dispense import dispense_line
from hims_pharmacy.services.stock_catalog import (
    InMemoryBatchCatalog,
    SqlBatchCatalog,
    parse_stock_batches,
)


class TestParseStockBatches:

    def test_wire_values_coerced(self):
        rows = [{"batch_number": " B1 ", "quantity": "5", "unit_price": "10.50",
                 "expiry_date": "2025-01-01"}]

        assert parse_stock_batches(rows) == [
            StockBatch("B1", 5, Decimal("10.50"), date(2025, 1, 1))
        ]

    @pytest.mark.parametrize(
        "row",
        [
            {"batch_number": "B1", "quantity": -1, "unit_price": "1", "expiry_date": "2025-01-01"},
            {"batch_number": "B1", "quantity": 1, "unit_price": "-1", "expiry_date": "2025-01-01"},
            {"batch_number": "B1", "quantity": 1, "unit_price": "1", "expiry_date": "soon"},
            {"batch_number": "  ", "quantity": 1, "unit_price": "1", "expiry_date": "2025-01-01"},
            {"quantity": 1, "unit_price": "1", "expiry_date": "2025-01-01"},
            {"batch_number": "B1", "quantity": 1, "unit_price": "0.125", "expiry_date": "2025-01-01"},
        ],
    )
    def test_malformed_rows_rejected(self, row):
        with pytest.raises(InvalidInput):
            parse_stock_batches([row])


class TestInMemoryBatchCatalog:

    def test_returns_copy(self, memory_catalog):
        batches = memory_catalog.get_batches(1)
        batches.clear()
        assert len(memory_catalog.get_batches(1)) == 2

    def test_unknown_medicine_is_empty(self, memory_catalog):
        assert memory_catalog.get_batches("nope") == []

    def test_accepts_raw_dicts(self):
        catalog = InMemoryBatchCatalog({
            "M": [{"batch_number": "B", "quantity": 1, "unit_price": 2, "expiry_date": "2025-02-02"}]
        })
        assert catalog.get_batches("M")[0].unit_price == Decimal("2")


class TestSqlBatchCatalog:

    def test_reads_saleable_batches_in_id_order(self, db_session, add_batch):
        add_batch("LATE", 10, "12.00", date(2025, 6, 1))
        add_batch("EARLY", 5, "10.00", date(2025, 1, 1))

        batches = SqlBatchCatalog(db_session, location_id=1).get_batches(1)

        assert [b.batch_number for b in batches] == ["LATE", "EARLY"]
        assert batches[1] == StockBatch("EARLY", 5, Decimal("10.00"), date(2025, 1, 1))

    def test_filters_unusable_rows(self, db_session, add_batch):
        add_batch("GOOD", 3, "1", date(2025, 1, 1))
        add_batch("EMPTY", 0, "1", date(2025, 1, 1))
        add_batch("INACTIVE", 3, "1", date(2025, 1, 1), is_active=False)
        add_batch("BLOCKED", 3, "1", date(2025, 1, 1), is_saleable=False)
        add_batch("QUAR", 3, "1", date(2025, 1, 1), status="QUARANTINE")
        add_batch("NOEXP", 3, "1", None)
        add_batch("OTHERLOC", 3, "1", date(2025, 1, 1), location_id=2)

        batches = SqlBatchCatalog(db_session, location_id=1).get_batches(1)

        assert [b.batch_number for b in batches] == ["GOOD"]

    def test_all_locations_when_unset(self, db_session, add_batch):
        add_batch("A", 1, "1", date(2025, 1, 1), location_id=1)
        add_batch("B", 1, "1", date(2025, 1, 1), location_id=2)

        assert len(SqlBatchCatalog(db_session).get_batches(1)) == 2

    def test_as_of_hides_expired(self, db_session, add_batch):
        add_batch("OLD", 5, "1", date(2024, 12, 31))
        add_batch("TODAY", 5, "1", date(2025, 1, 1))

        batches = SqlBatchCatalog(db_session, location_id=1, as_of=date(2025, 1, 1)).get_batches(1)

        assert [b.batch_number for b in batches] == ["TODAY"]

    def test_feeds_dispense_line(self, db_session, add_batch):
        add_batch("B2", 10, "12", date(2025, 6, 1))
        add_batch("B1", 5, "10", date(2025, 1, 1))

        line = dispense_line(SqlBatchCatalog(db_session, location_id=1), 1, 8)

        assert line.batch_label == "B1(5) + B2(3)"
        assert line.amount == Decimal("96.00")

    def test_skip_expired_setting(self, db_session, add_batch, monkeypatch):
        from hims_pharmacy.core.config import settings

        monkeypatch.setattr(settings, "PHARMACY_SKIP_EXPIRED", True)
        add_batch("LONG_GONE", 5, "1", date(2000, 1, 1))
        add_batch("FAR_FUTURE", 5, "1", date(2999, 1, 1))

        batches = SqlBatchCatalog(db_session, location_id=1).get_batches(1)

        assert [b.batch_number for b in batches] == ["FAR_FUTURE"]

    @pytest.mark.parametrize("medicine_id", ["PCM", None, "1.5"])
    def test_non_numeric_medicine_id_rejected(self, db_session, medicine_id):
        with pytest.raises(InvalidInput):
            SqlBatchCatalog(db_session, location_id=1).get_batches(medicine_id)
