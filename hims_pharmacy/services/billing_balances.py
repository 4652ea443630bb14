# FILE: hims_pharmacy/services/billing_balances.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from hims_pharmacy.models.billing import BillPaymentStatus
from hims_pharmacy.services.billing_math import ZERO, D, money2


def _is_active(payment) -> bool:
    return not getattr(payment, "is_deleted", False)


def total_paid(payments: Iterable) -> Decimal:
    return money2(sum((D(p.amount) for p in payments or [] if _is_active(p)),
                      ZERO))


def bill_due(net_amount, payments: Iterable) -> Decimal:
    """
    due = net - sum(active payments).
    <= 0 means settled; over-payment is rejected when a payment is recorded,
    not here.
    """
    return money2(net_amount) - total_paid(payments)


def payment_status(net_amount, payments: Iterable) -> BillPaymentStatus:
    paid = total_paid(payments)
    if paid >= money2(net_amount):
        return BillPaymentStatus.PAID
    if paid > 0:
        return BillPaymentStatus.PARTIALLY_PAID
    return BillPaymentStatus.PENDING
