# FILE: hims_pharmacy/api/routes_pharmacy_dispense.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hims_pharmacy.api.deps import CatalogFactory, get_catalog_factory
from hims_pharmacy.api.response import ok
from hims_pharmacy.schemas.pharmacy_dispense import (
    AllocateIn,
    BillingRecomputeIn,
    BillTotalsOut,
    DueIn,
    DueOut,
    LineItemOut,
    PreviewIn,
    StockBatchOut,
    StockOut,
)
from hims_pharmacy.services.billing_balances import (
    bill_due,
    payment_status,
    total_paid,
)
from hims_pharmacy.services.billing_calc import recompute_bill_totals
from hims_pharmacy.services.billing_payment_service import check_payments_within_net
from hims_pharmacy.services.inventory import available_quantity
from hims_pharmacy.services.pharmacy_dispense import build_line_item, dispense_line
from hims_pharmacy.services.stock_catalog import parse_stock_batches

router = APIRouter()


# ---------------- Stock ----------------
@router.get("/dispense/stock/{medicine_id}")
def medicine_stock(
    medicine_id: int,
    location_id: Optional[int] = Query(None),
    make_catalog: CatalogFactory = Depends(get_catalog_factory),
):
    batches = make_catalog(location_id).get_batches(medicine_id)
    out = StockOut(
        medicine_id=medicine_id,
        available_qty=available_quantity(batches),
        batches=[StockBatchOut.model_validate(b) for b in batches],
    )
    return ok(out.model_dump())


# ---------------- Allocation ----------------
@router.post("/dispense/allocate")
def allocate_line(
    inp: AllocateIn,
    make_catalog: CatalogFactory = Depends(get_catalog_factory),
):
    """FEFO-allocate from live stock and return the bill line payload."""
    line = dispense_line(make_catalog(inp.location_id), inp.medicine_id,
                         inp.quantity)
    return ok(LineItemOut.from_line(line).model_dump())


@router.post("/dispense/preview")
def preview_line(inp: PreviewIn):
    """Same as allocate, over batches supplied by the caller (no DB)."""
    batches = parse_stock_batches(inp.batches)
    line = build_line_item(inp.medicine_id, inp.quantity, batches)
    return ok(LineItemOut.from_line(line).model_dump())


# ---------------- Billing ----------------
@router.post("/billing/recompute")
def recompute_totals(inp: BillingRecomputeIn):
    totals = recompute_bill_totals(
        inp.lines,
        inp.discount_percent,
        inp.discount_amount,
        inp.tax_percent,
        inp.tax_amount,
    )
    return ok(BillTotalsOut.model_validate(totals).model_dump())


@router.post("/billing/due")
def compute_due(inp: DueIn):
    check_payments_within_net(inp.net_amount, inp.payments)
    out = DueOut(
        net_amount=inp.net_amount,
        total_paid=total_paid(inp.payments),
        due=bill_due(inp.net_amount, inp.payments),
        status=payment_status(inp.net_amount, inp.payments),
    )
    return ok(out.model_dump())
