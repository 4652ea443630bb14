# FILE: hims_pharmacy/services/billing_calc.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from hims_pharmacy.services.billing_math import (
    HUNDRED,
    ZERO,
    D,
    money2,
    percent_of,
)


@dataclass(frozen=True)
class BillTotals:
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    net: Decimal
    # percentage implied by the figures, for display next to the amount box
    discount_percent_effective: Decimal = ZERO
    tax_percent_effective: Decimal = ZERO


def _implied_percent(amount: Decimal, base: Decimal) -> Decimal:
    if base <= 0:
        return ZERO
    return money2(amount * HUNDRED / base)


def recompute_bill_totals(
    lines: Iterable,
    discount_percent=0,
    discount_amount=0,
    tax_percent=0,
    tax_amount=0,
) -> BillTotals:
    """
    Full recompute of a bill from its current lines and discount/tax inputs.

      subtotal = sum(line.amount)
      discount = subtotal * discount% / 100   if discount% > 0 else discount_amount
      tax      = (subtotal - discount) * tax% / 100   if tax% > 0 else tax_amount
      net      = subtotal - discount + tax

    A percentage always wins over a typed absolute amount. Nothing is carried
    over from a previous call, so the same inputs always give the same totals.
    Discount and tax are rounded to 0.01 before net is formed.
    """
    discount_percent = D(discount_percent)
    tax_percent = D(tax_percent)

    subtotal = money2(sum((D(line.amount) for line in lines), ZERO))

    if discount_percent > 0:
        discount = percent_of(subtotal, discount_percent)
        discount_pct_eff = discount_percent
    else:
        discount = money2(discount_amount)
        discount_pct_eff = _implied_percent(discount, subtotal)

    taxable = subtotal - discount
    if tax_percent > 0:
        tax = percent_of(taxable, tax_percent)
        tax_pct_eff = tax_percent
    else:
        tax = money2(tax_amount)
        tax_pct_eff = _implied_percent(tax, taxable)

    net = subtotal - discount + tax

    return BillTotals(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        net=net,
        discount_percent_effective=discount_pct_eff,
        tax_percent_effective=tax_pct_eff,
    )
