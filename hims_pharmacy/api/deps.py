# FILE: hims_pharmacy/api/deps.py
from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from hims_pharmacy.core.config import settings
from hims_pharmacy.db.session import get_db
from hims_pharmacy.services.stock_catalog import BatchCatalog, SqlBatchCatalog

CatalogFactory = Callable[[Optional[int]], BatchCatalog]


def get_catalog_factory(db: Session = Depends(get_db)) -> CatalogFactory:
    """
    Per-request catalog builder; the location comes from the request body,
    falling back to DEFAULT_LOCATION_ID.
    """

    def _make(location_id: Optional[int] = None) -> BatchCatalog:
        if location_id is None:
            location_id = settings.DEFAULT_LOCATION_ID
        return SqlBatchCatalog(db, location_id=location_id)

    return _make
