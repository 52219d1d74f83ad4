# dentalcare/api/router.py
from fastapi import APIRouter
from dentalcare.api import (
    routes_reports,
    routes_pharmacy_sales,
)

api_router = APIRouter()

# ---- Reports
api_router.include_router(routes_reports.router,
                          prefix="/reports",
                          tags=["reports"])

# ---- Pharmacy
api_router.include_router(routes_pharmacy_sales.router,
                          prefix="/pharmacy-sales",
                          tags=["pharmacy"])
