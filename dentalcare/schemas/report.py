# FILE: dentalcare/schemas/report.py
from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ReportKind = Literal["patients", "appointments", "financial", "pharmacy"]


class ReportModel(BaseModel):
    """
    Base for report payloads.
    Python side uses snake_case; JSON goes out camelCase (totalRevenue, noShow ...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportWindow(ReportModel):
    # period is echoed back untouched; aggregation is always monthly
    period: str
    start_date: date
    end_date: date


# ---------------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------------


class PatientTrendPoint(ReportModel):
    date: str  # YYYY-MM
    new_patients: int = 0
    returning_patients: int = 0


class PatientStatistics(ReportWindow):
    total_patients: int = 0
    new_patients: int = 0
    returning_patients: int = 0
    average_age: float = 0.0
    gender_distribution: Dict[str, int]
    monthly_trends: List[PatientTrendPoint] = []


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------


class AppointmentTrendPoint(ReportModel):
    date: str
    total: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0


class AppointmentStatistics(ReportWindow):
    total_appointments: int = 0
    completed_appointments: int = 0
    cancelled_appointments: int = 0
    no_show_appointments: int = 0
    type_distribution: Dict[str, int] = {}
    treatment_type_distribution: Dict[str, int] = {}
    monthly_trends: List[AppointmentTrendPoint] = []


# ---------------------------------------------------------------------------
# Financial
# ---------------------------------------------------------------------------


class FinancialTrendPoint(ReportModel):
    date: str
    total_revenue: float = 0.0
    appointment_revenue: float = 0.0
    pharmacy_revenue: float = 0.0


class ProcedureRevenue(ReportModel):
    type: str
    count: int
    revenue: float


class FinancialStatistics(ReportWindow):
    total_revenue: float = 0.0
    appointment_revenue: float = 0.0
    pharmacy_revenue: float = 0.0
    average_appointment_value: float = 0.0
    average_pharmacy_sale: float = 0.0
    # online + cash may be less than appointment_revenue when other
    # payment types exist; those are left out of both buckets
    online_amount: float = 0.0
    cash_amount: float = 0.0
    top_procedures: List[ProcedureRevenue] = []
    monthly_trends: List[FinancialTrendPoint] = []


# ---------------------------------------------------------------------------
# Pharmacy
# ---------------------------------------------------------------------------


class PharmacyTrendPoint(ReportModel):
    date: str
    sales: int = 0
    revenue: float = 0.0


class TopSellingMedicine(ReportModel):
    medicine_id: int
    medicine_name: str
    quantity: int
    revenue: float


class StockAlert(ReportModel):
    medicine_id: int
    medicine_name: str
    current_stock: int
    reorder_point: int


class ExpiryAlert(ReportModel):
    medicine_id: int
    medicine_name: str
    expiry_date: date


class PharmacyStatistics(ReportWindow):
    total_sales: int = 0
    total_revenue: float = 0.0
    average_sale_value: float = 0.0
    top_selling_medicines: List[TopSellingMedicine] = []
    monthly_trends: List[PharmacyTrendPoint] = []
    stock_alerts: List[StockAlert] = []
    expiry_alerts: List[ExpiryAlert] = []
