# FILE: hims_pharmacy/services/billing_payment_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Tuple

from hims_pharmacy.models.billing import PayMode
from hims_pharmacy.services.billing_balances import bill_due, total_paid
from hims_pharmacy.services.billing_math import money2
from hims_pharmacy.services.errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Payment:
    id: Any
    amount: Decimal
    mode: PayMode
    timestamp: datetime
    is_deleted: bool = False


@dataclass(frozen=True)
class PaymentLedger:
    """
    Append / soft-delete log of payments against one bill
    (pathology, radiology and pharmacy payment dialogs).
    """
    net_amount: Decimal
    payments: Tuple[Payment, ...] = ()

    @property
    def total_paid(self) -> Decimal:
        return total_paid(self.payments)

    @property
    def due(self) -> Decimal:
        return bill_due(self.net_amount, self.payments)

    def active_payments(self) -> Tuple[Payment, ...]:
        return tuple(p for p in self.payments if not p.is_deleted)

    def _next_id(self) -> int:
        ids = [p.id for p in self.payments if isinstance(p.id, int)]
        return (max(ids) if ids else 0) + 1

    def record_payment(
        self,
        amount,
        mode: PayMode | str = PayMode.CASH,
        *,
        payment_id: Optional[Any] = None,
        timestamp: Optional[datetime] = None,
    ) -> Tuple["PaymentLedger", Payment]:
        amount = money2(amount)
        if amount <= 0:
            raise InvalidInput("Payment amount must be > 0")

        due = self.due
        if due <= 0:
            raise InvalidInput(f"Bill already settled (net={money2(self.net_amount)} "
                               f"paid={self.total_paid})")
        if amount > due:
            raise InvalidInput(f"Payment exceeds due. due={due} got={amount}")

        try:
            mode = PayMode(mode)
        except ValueError:
            raise InvalidInput(f"Unknown payment mode: {mode}")

        pid = payment_id if payment_id is not None else self._next_id()
        if any(p.id == pid for p in self.payments):
            raise InvalidInput(f"Duplicate payment id: {pid}")

        pay = Payment(
            id=pid,
            amount=amount,
            mode=mode,
            timestamp=timestamp or datetime.utcnow(),
        )
        logger.info("Payment %s recorded: amount=%s mode=%s due_before=%s",
                    pid, amount, mode.value, due)
        return replace(self, payments=self.payments + (pay, )), pay

    def delete_payment(self, payment_id) -> "PaymentLedger":
        """Soft-delete: the entry stays in the log, its amount goes back to due."""
        for idx, p in enumerate(self.payments):
            if p.id != payment_id:
                continue
            if p.is_deleted:
                raise InvalidInput(f"Payment {payment_id} already deleted")
            payments = list(self.payments)
            payments[idx] = replace(p, is_deleted=True)
            logger.info("Payment %s deleted: amount=%s", payment_id, p.amount)
            return replace(self, payments=tuple(payments))
        raise InvalidInput(f"Payment {payment_id} not found")


def check_payments_within_net(net_amount, payments) -> None:
    """
    Reject a payment set whose active total is above the bill's net.
    Same boundary record_payment enforces one payment at a time.
    """
    paid = total_paid(payments)
    net = money2(net_amount)
    if paid > net:
        raise InvalidInput(f"Payments exceed net amount. net={net} paid={paid}")
