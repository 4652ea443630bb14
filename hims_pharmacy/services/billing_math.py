# FILE: hims_pharmacy/services/billing_math.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from hims_pharmacy.services.errors import InvalidInput

Q2 = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def D(x) -> Decimal:
    """
    Coerce numbers/strings coming from the UI into Decimal.
    None/"" count as 0; anything unparsable is rejected.
    """
    if x is None or x == "":
        return ZERO
    if isinstance(x, Decimal):
        value = x
    else:
        try:
            value = Decimal(str(x).strip())
        except (InvalidOperation, ValueError):
            raise InvalidInput(f"Not a number: {x!r}")
    if not value.is_finite():
        raise InvalidInput(f"Not a finite number: {x!r}")
    return value


def money2(x) -> Decimal:
    return D(x).quantize(Q2, rounding=ROUND_HALF_UP)


def percent_of(base, percent) -> Decimal:
    return money2(D(base) * D(percent) / HUNDRED)


def non_negative(x, field: str) -> Decimal:
    value = D(x)
    if value < 0:
        raise InvalidInput(f"{field} cannot be negative")
    return value


def valid_percent(x, field: str) -> Decimal:
    value = non_negative(x, field)
    if value > HUNDRED:
        raise InvalidInput(f"{field} cannot exceed 100")
    return value
