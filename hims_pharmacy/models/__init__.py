# hims_pharmacy/models/__init__.py
from .pharmacy_inventory import InventoryLocation, InventoryItem, ItemBatch
from .billing import PayMode, BillPaymentStatus

__all__ = [
    "InventoryLocation",
    "InventoryItem",
    "ItemBatch",
    "PayMode",
    "BillPaymentStatus",
]
