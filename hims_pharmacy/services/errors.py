# FILE: hims_pharmacy/services/errors.py
from __future__ import annotations


class PharmacyError(ValueError):
    """Base for local, synchronous failures of the dispensing/billing core."""

    code = "pharmacy_error"


class InvalidInput(PharmacyError):
    """Negative quantities/prices, bad percentages or malformed batch data."""

    code = "invalid_input"


class InsufficientStock(PharmacyError):
    """Requested quantity exceeds what the non-exhausted batches hold."""

    code = "insufficient_stock"

    def __init__(self, required: int, available: int,
                 medicine_id=None) -> None:
        self.required = int(required)
        self.available = int(available)
        self.medicine_id = medicine_id
        label = f" for medicine {medicine_id}" if medicine_id is not None else ""
        super().__init__(f"Insufficient stock{label}. "
                         f"Required {self.required}, available {self.available} "
                         f"(short by {self.short_by} units)")

    @property
    def short_by(self) -> int:
        return self.required - self.available

    def with_medicine(self, medicine_id) -> "InsufficientStock":
        return InsufficientStock(self.required, self.available, medicine_id)


__all__ = ["PharmacyError", "InvalidInput", "InsufficientStock"]
