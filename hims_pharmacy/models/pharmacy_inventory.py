# FILE: hims_pharmacy/models/pharmacy_inventory.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, Numeric,
    ForeignKey, Enum, CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship

from hims_pharmacy.db.base import Base

Money = Numeric(14, 2)


# -------------------------
# Masters
# -------------------------
class InventoryLocation(Base):
    __tablename__ = "inv_locations"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    is_pharmacy = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    batches = relationship("ItemBatch", back_populates="location")


class InventoryItem(Base):
    """A dispensable medicine (or consumable) master row."""
    __tablename__ = "inv_items"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    generic_name = Column(String(255), default="")
    form = Column(String(100), default="")
    strength = Column(String(100), default="")

    is_consumable = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    batches = relationship("ItemBatch", back_populates="item")


# -------------------------
# Stock
# -------------------------
class ItemBatch(Base):
    """
    Batch-wise stock per location. Written by purchase/GRN and the
    stock-commit service; the dispensing core only reads it.
    """
    __tablename__ = "inv_item_batches"
    __table_args__ = (
        UniqueConstraint("item_id", "location_id", "batch_no", name="uq_inv_batch_unique"),
        Index("ix_inv_batch_item_loc", "item_id", "location_id"),
        Index("ix_inv_batch_loc_exp", "location_id", "expiry_date"),
        CheckConstraint("current_qty >= 0", name="ck_inv_batch_qty_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("inv_items.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("inv_locations.id"), nullable=True, index=True)

    batch_no = Column(String(100), nullable=False)
    expiry_date = Column(Date, nullable=True)

    current_qty = Column(Integer, default=0, nullable=False)
    unit_cost = Column(Money, default=0)
    selling_price = Column(Money, default=0)

    is_active = Column(Boolean, default=True, nullable=False)
    is_saleable = Column(Boolean, nullable=False, default=True)
    status = Column(
        Enum("ACTIVE", "EXPIRED", "RETURNED", "WRITTEN_OFF", "QUARANTINE", name="inventory_batch_status"),
        nullable=False,
        default="ACTIVE",
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    item = relationship("InventoryItem", back_populates="batches")
    location = relationship("InventoryLocation", back_populates="batches")
