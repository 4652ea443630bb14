# FILE: hims_pharmacy/services/stock_catalog.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy.orm import Session

from hims_pharmacy.core.config import settings
from hims_pharmacy.models.pharmacy_inventory import ItemBatch
from hims_pharmacy.schemas.pharmacy_dispense import StockBatchIn
from hims_pharmacy.services.errors import InvalidInput
from hims_pharmacy.services.inventory import StockBatch

logger = logging.getLogger(__name__)


class BatchCatalog(Protocol):
    """Anything that can list a medicine's stock batches at a point in time."""

    def get_batches(self, medicine_id) -> List[StockBatch]:
        ...


def to_stock_batch(raw: Any) -> StockBatch:
    """
    Validate one batch as received from the inventory side
    (dict or StockBatchIn) and turn it into a StockBatch.
    """
    try:
        item = raw if isinstance(raw, StockBatchIn) else StockBatchIn.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInput(f"Malformed batch data: {exc.errors()[0].get('msg')}")
    return StockBatch(
        batch_number=item.batch_number,
        quantity=item.quantity,
        unit_price=item.unit_price,
        expiry_date=item.expiry_date,
    )


def parse_stock_batches(rows: Iterable[Any]) -> List[StockBatch]:
    return [to_stock_batch(r) for r in rows or []]


class InMemoryBatchCatalog:
    """Fixture catalog: medicine_id -> list of batches (dicts or StockBatch)."""

    def __init__(self, data: Optional[Mapping[Any, Iterable[Any]]] = None) -> None:
        self._data: Dict[Any, List[StockBatch]] = {}
        for medicine_id, rows in (data or {}).items():
            self._data[medicine_id] = [
                r if isinstance(r, StockBatch) else to_stock_batch(r)
                for r in rows
            ]

    def get_batches(self, medicine_id) -> List[StockBatch]:
        # copy, so callers cannot reorder the stored snapshot
        return list(self._data.get(medicine_id, []))


class SqlBatchCatalog:
    """
    Reads saleable batches of an item from inv_item_batches.

    - Uses only ACTIVE + SALEABLE batches with current_qty > 0
    - Batches without an expiry date are not dispensable here
    - Optionally hides batches expired before `as_of`
      (PHARMACY_SKIP_EXPIRED, or pass as_of explicitly)
    - Returns rows in id order; FEFO ordering is the allocator's job
    - Plain read, no FOR UPDATE: the stock-commit service owns that race
    """

    def __init__(
        self,
        db: Session,
        *,
        location_id: int | None = None,
        as_of: date | None = None,
    ) -> None:
        self.db = db
        self.location_id = location_id
        if as_of is None and settings.PHARMACY_SKIP_EXPIRED:
            as_of = date.today()
        self.as_of = as_of

    def get_batches(self, medicine_id) -> List[StockBatch]:
        try:
            item_id = int(medicine_id)
        except (TypeError, ValueError):
            raise InvalidInput(f"Unknown medicine id: {medicine_id!r}")

        q = (self.db.query(ItemBatch).filter(
            ItemBatch.item_id == item_id,
            ItemBatch.current_qty > 0,
            ItemBatch.is_active.is_(True),
            ItemBatch.is_saleable.is_(True),
            ItemBatch.status == "ACTIVE",
            ItemBatch.expiry_date.isnot(None),
        ))
        if self.location_id is not None:
            q = q.filter(ItemBatch.location_id == self.location_id)
        if self.as_of is not None:
            q = q.filter(ItemBatch.expiry_date >= self.as_of)

        rows = q.order_by(ItemBatch.id.asc()).all()
        logger.debug("Catalog item=%s location=%s -> %d batches", medicine_id,
                     self.location_id, len(rows))

        return [
            StockBatch(
                batch_number=b.batch_no,
                quantity=int(b.current_qty or 0),
                unit_price=Decimal(str(b.selling_price or 0)),
                expiry_date=b.expiry_date,
            ) for b in rows
        ]
