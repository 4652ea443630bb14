# FILE: hims_pharmacy/services/billing_session.py
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Tuple

from hims_pharmacy.services.billing_calc import BillTotals, recompute_bill_totals
from hims_pharmacy.services.billing_math import ZERO, non_negative, valid_percent
from hims_pharmacy.services.errors import InvalidInput
from hims_pharmacy.services.pharmacy_dispense import BillLineItem


@dataclass(frozen=True)
class BillingState:
    """
    Everything the pharmacy billing form edits, as one immutable value.

    Every edit returns a new state; totals() recomputes from scratch, so
    discount and tax can never go stale relative to each other.
    """
    lines: Tuple[BillLineItem, ...] = ()
    discount_percent: Decimal = ZERO
    discount_amount: Decimal = ZERO
    tax_percent: Decimal = ZERO
    tax_amount: Decimal = ZERO

    # ---------- lines ----------

    def add_line(self, line: BillLineItem) -> "BillingState":
        return replace(self, lines=self.lines + (line, ))

    def replace_line(self, index: int, line: BillLineItem) -> "BillingState":
        self._check_index(index)
        lines = list(self.lines)
        lines[index] = line
        return replace(self, lines=tuple(lines))

    def remove_line(self, index: int) -> "BillingState":
        self._check_index(index)
        return replace(self,
                       lines=self.lines[:index] + self.lines[index + 1:])

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.lines):
            raise InvalidInput(f"No bill line at position {index}")

    # ---------- discount / tax inputs ----------

    def set_discount_percent(self, value) -> "BillingState":
        return replace(self,
                       discount_percent=valid_percent(value, "Discount %"))

    def set_discount_amount(self, value) -> "BillingState":
        return replace(self,
                       discount_amount=non_negative(value, "Discount amount"))

    def set_tax_percent(self, value) -> "BillingState":
        return replace(self, tax_percent=valid_percent(value, "Tax %"))

    def set_tax_amount(self, value) -> "BillingState":
        return replace(self, tax_amount=non_negative(value, "Tax amount"))

    # ---------- derived ----------

    def totals(self) -> BillTotals:
        return recompute_bill_totals(
            self.lines,
            self.discount_percent,
            self.discount_amount,
            self.tax_percent,
            self.tax_amount,
        )
