# FILE: hims_pharmacy/services/pharmacy_pricing.py
from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from hims_pharmacy.services.billing_math import ZERO, D
from hims_pharmacy.services.inventory import AllocationLine


def resolve_unit_price(allocation: Sequence[AllocationLine]) -> Decimal:
    """
    Single unit price for a line drawn from one or more batches.

    A line item shows one price, so the highest price among the contributing
    batches is billed for every unit (not a weighted average, not the first
    batch's price). Empty allocation -> 0.
    """
    if not allocation:
        return ZERO
    return max(D(a.unit_price) for a in allocation)


def line_amount(quantity: int, allocation: Sequence[AllocationLine]) -> Decimal:
    # exact product; batch prices are whole cents, so this stays at 0.01
    return D(quantity) * resolve_unit_price(allocation)
