# FILE: hims_pharmacy/services/inventory.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List

from hims_pharmacy.services.errors import InsufficientStock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockBatch:
    """Point-in-time view of one physical lot of a medicine (read-only)."""
    batch_number: str
    quantity: int
    unit_price: Decimal
    expiry_date: date


@dataclass(frozen=True)
class AllocationLine:
    batch_number: str
    quantity: int
    unit_price: Decimal
    expiry_date: date


def allocate_batches_fefo(
    batches: Iterable[StockBatch],
    required_quantity: int,
) -> List[AllocationLine]:
    """
    FEFO allocation (First-Expiry-First-Out) over a catalog snapshot.

    - Skips exhausted batches (quantity <= 0)
    - Orders by expiry date, earliest first; equal expiry keeps catalog order
    - Returns the slices to draw, in draw order
    - Raises InsufficientStock if the snapshot cannot cover the request;
      a shortage never yields a partial allocation
    - Never mutates the batches (stock is decremented on commit, elsewhere)
    """
    if required_quantity <= 0:
        return []

    usable = [b for b in batches if b.quantity > 0]
    # sorted() is stable, so ties stay in catalog order
    usable = sorted(usable, key=lambda b: b.expiry_date)

    remaining = required_quantity
    allocations: List[AllocationLine] = []

    for batch in usable:
        if remaining <= 0:
            break

        use_qty = min(batch.quantity, remaining)
        allocations.append(
            AllocationLine(
                batch_number=batch.batch_number,
                quantity=use_qty,
                unit_price=batch.unit_price,
                expiry_date=batch.expiry_date,
            ))
        remaining -= use_qty

    if remaining > 0:
        available = required_quantity - remaining
        logger.warning("FEFO allocation short: required=%s available=%s",
                       required_quantity, available)
        raise InsufficientStock(required_quantity, available)

    logger.debug("FEFO allocation for qty=%s: %s", required_quantity,
                 [(a.batch_number, a.quantity) for a in allocations])
    return allocations


def available_quantity(batches: Iterable[StockBatch]) -> int:
    return sum(b.quantity for b in batches if b.quantity > 0)
