# FILE: hims_pharmacy/services/pharmacy_dispense.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Tuple

from hims_pharmacy.services.errors import InsufficientStock, InvalidInput
from hims_pharmacy.services.inventory import AllocationLine, allocate_batches_fefo
from hims_pharmacy.services.pharmacy_pricing import line_amount, resolve_unit_price
from hims_pharmacy.services.stock_catalog import BatchCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillLineItem:
    """
    One medicine + quantity on a bill, backed by one or more batches.
    amount == quantity * display_unit_price, exactly.
    """
    medicine_id: Any
    quantity: int
    allocations: Tuple[AllocationLine, ...]
    display_unit_price: Decimal
    amount: Decimal

    @property
    def batch_label(self) -> str:
        return format_batch_label(self.allocations)

    @property
    def expiry_label(self) -> str:
        return format_expiry_label(self.allocations)


def format_batch_label(allocations) -> str:
    # e.g. "B1(5) + B2(3)"
    return " + ".join(f"{a.batch_number}({a.quantity})" for a in allocations)


def format_expiry_label(allocations) -> str:
    return ", ".join(a.expiry_date.isoformat() for a in allocations)


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInput("Quantity must be a whole number")
    if quantity < 0:
        raise InvalidInput("Quantity cannot be negative")
    return quantity


def build_line_item(medicine_id, quantity: int, batches) -> BillLineItem:
    """
    allocate -> resolve price -> amount, over an already fetched snapshot.
    Raises InsufficientStock (tagged with the medicine) on shortage.
    """
    quantity = _check_quantity(quantity)
    try:
        allocation = allocate_batches_fefo(batches, quantity)
    except InsufficientStock as exc:
        raise exc.with_medicine(medicine_id) from None

    return BillLineItem(
        medicine_id=medicine_id,
        quantity=quantity,
        allocations=tuple(allocation),
        display_unit_price=resolve_unit_price(allocation),
        amount=line_amount(quantity, allocation),
    )


def dispense_line(catalog: BatchCatalog, medicine_id,
                  quantity: int) -> BillLineItem:
    """Fetch one catalog snapshot for the medicine and build its line item."""
    quantity = _check_quantity(quantity)
    if quantity == 0:
        return build_line_item(medicine_id, 0, [])

    batches = catalog.get_batches(medicine_id)
    line = build_line_item(medicine_id, quantity, batches)
    logger.info("Dispense line medicine=%s qty=%s batches=%s amount=%s",
                medicine_id, quantity, line.batch_label, line.amount)
    return line
