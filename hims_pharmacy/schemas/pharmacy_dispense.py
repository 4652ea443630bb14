# FILE: hims_pharmacy/schemas/pharmacy_dispense.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hims_pharmacy.models.billing import BillPaymentStatus, PayMode
from hims_pharmacy.services.billing_math import money2

MedicineId = Union[int, str]

# ---------- Stock batches (inventory side) ----------


class StockBatchIn(BaseModel):
    batch_number: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    expiry_date: date

    @field_validator("batch_number")
    @classmethod
    def _strip_batch_number(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("batch_number is required")
        return v


class StockBatchOut(BaseModel):
    batch_number: str
    quantity: int
    unit_price: Decimal
    expiry_date: date

    model_config = ConfigDict(from_attributes=True)


class StockOut(BaseModel):
    medicine_id: MedicineId
    available_qty: int
    batches: List[StockBatchOut]


# ---------- Allocation ----------


class AllocateIn(BaseModel):
    medicine_id: int
    quantity: int = Field(..., ge=0)
    location_id: Optional[int] = None


class PreviewIn(BaseModel):
    medicine_id: Optional[MedicineId] = None
    quantity: int = Field(..., ge=0)
    batches: List[StockBatchIn] = []


class AllocationLineOut(BaseModel):
    batch_number: str
    quantity: int
    unit_price: Decimal
    expiry_date: date

    model_config = ConfigDict(from_attributes=True)


class LineItemOut(BaseModel):
    medicine_id: Optional[MedicineId] = None
    quantity: int
    allocations: List[AllocationLineOut]
    unit_price: Decimal
    amount: Decimal
    batch_label: str
    expiry_label: str

    @classmethod
    def from_line(cls, line) -> "LineItemOut":
        return cls(
            medicine_id=line.medicine_id,
            quantity=line.quantity,
            allocations=[
                AllocationLineOut.model_validate(a) for a in line.allocations
            ],
            unit_price=line.display_unit_price,
            amount=line.amount,
            batch_label=line.batch_label,
            expiry_label=line.expiry_label,
        )


# ---------- Bill totals ----------


class BillLineIn(BaseModel):
    medicine_id: Optional[MedicineId] = None
    quantity: int = Field(..., ge=0)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)

    @property
    def amount(self) -> Decimal:
        return money2(self.quantity * self.unit_price)


class BillingRecomputeIn(BaseModel):
    lines: List[BillLineIn] = []
    discount_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    tax_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    tax_amount: Decimal = Field(Decimal("0"), ge=0)


class BillTotalsOut(BaseModel):
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    net: Decimal
    discount_percent_effective: Decimal
    tax_percent_effective: Decimal

    model_config = ConfigDict(from_attributes=True)


# ---------- Payments / due ----------


class PaymentIn(BaseModel):
    id: Optional[Union[int, str]] = None
    amount: Decimal = Field(..., gt=0)
    mode: PayMode = PayMode.CASH
    timestamp: Optional[datetime] = None
    is_deleted: bool = False


class DueIn(BaseModel):
    net_amount: Decimal = Field(..., ge=0)
    payments: List[PaymentIn] = []


class DueOut(BaseModel):
    net_amount: Decimal
    total_paid: Decimal
    due: Decimal
    status: BillPaymentStatus
