# hims_pharmacy/api/router.py
from fastapi import APIRouter
from hims_pharmacy.api import routes_pharmacy_dispense

api_router = APIRouter()

api_router.include_router(routes_pharmacy_dispense.router,
                          prefix="/pharmacy",
                          tags=["Pharmacy Dispensing"])
