# hims_pharmacy/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Tenant-level tables read by the pharmacy core inherit from this."""
    pass
