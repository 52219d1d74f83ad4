# FILE: dentalcare/services/report_service.py
from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from dentalcare.core.config import settings
from dentalcare.crud import crud_amount, crud_appointment, crud_patient, crud_pharmacy
from dentalcare.models.amount import Amount
from dentalcare.models.appointment import Appointment
from dentalcare.models.patient import Patient
from dentalcare.models.pharmacy import Medicine, PharmacySale
from dentalcare.schemas.report import (
    AppointmentStatistics,
    AppointmentTrendPoint,
    ExpiryAlert,
    FinancialStatistics,
    FinancialTrendPoint,
    PatientStatistics,
    PatientTrendPoint,
    PharmacyStatistics,
    PharmacyTrendPoint,
    ProcedureRevenue,
    StockAlert,
    TopSellingMedicine,
)
from dentalcare.services.fallible import attempt
from dentalcare.services.month_windows import (
    MonthWindow,
    add_months,
    check_range,
    day_bounds,
    monthly_trend,
)
from dentalcare.utils.timezone import today_local

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUS_NO_SHOW = "no-show"

PAYMENT_ONLINE = "online"
PAYMENT_CASH = "cash"

GENDER_BUCKETS = ("male", "female", "other")

# ---------- helpers ----------


def _dec(val: Any) -> Decimal:
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val or 0))


def _sum(values: Iterable[Any]) -> Decimal:
    return sum((_dec(v) for v in values), ZERO)


def _money(val: Decimal) -> float:
    return float(val)


def _average(total: Decimal, count: int) -> float:
    return _money(total / count) if count else 0.0


def _age_in_years(dob: date, today: date) -> int:
    before_birthday = (today.month, today.day) < (dob.month, dob.day)
    return today.year - dob.year - int(before_birthday)


def _returning_patients(db: Session, start: date, end: date) -> int:
    # a failed count reports 0 returning patients
    return attempt(
        "count_patients_with_multiple_appointments",
        lambda: crud_appointment.count_patients_with_multiple_appointments(
            db, start, end),
        db=db,
    ).unwrap_or(0)


def _amount_total(amounts: Iterable[Amount]) -> Decimal:
    return _sum(a.amount for a in amounts)


def _sales_total(sales: Iterable[PharmacySale]) -> Decimal:
    return _sum(s.total for s in sales)


# ---------- patients ----------


def _average_age(patients: List[Patient], today: date) -> float:
    ages = [
        _age_in_years(p.date_of_birth, today) for p in patients
        if p.date_of_birth is not None
    ]
    if not ages:
        return 0.0
    return sum(ages) / len(ages)


def _gender_distribution(patients: List[Patient]) -> Dict[str, int]:
    dist = {g: 0 for g in GENDER_BUCKETS}
    # literal values win; anything outside the three buckets gets its own key
    dist.update(Counter(p.gender for p in patients if p.gender is not None))
    return dist


def patient_statistics(db: Session,
                       period: str,
                       start: date,
                       end: date,
                       *,
                       today: Optional[date] = None) -> PatientStatistics:
    check_range(start, end)
    today = today or today_local()
    start_dt, end_dt = day_bounds(start, end)

    patients = crud_patient.find_patients_created_between(db, start_dt, end_dt)
    logger.debug("patient report %s..%s: %d new patients", start, end,
                 len(patients))

    def _month(w: MonthWindow) -> Dict[str, int]:
        return {
            "new_patients":
            len(crud_patient.find_patients_created_between(db, *w.bounds())),
            "returning_patients":
            _returning_patients(db, w.start, w.end),
        }

    trends = [
        PatientTrendPoint(date=label, **point)
        for label, point in monthly_trend(start, end, _month)
    ]

    return PatientStatistics(
        period=period,
        start_date=start,
        end_date=end,
        total_patients=crud_patient.count_all_patients(db),
        new_patients=len(patients),
        returning_patients=_returning_patients(db, start, end),
        average_age=_average_age(patients, today),
        gender_distribution=_gender_distribution(patients),
        monthly_trends=trends,
    )


# ---------- appointments ----------


def _status_counts(appointments: Iterable[Appointment]) -> Counter:
    return Counter(a.status for a in appointments)


def appointment_statistics(db: Session,
                           period: str,
                           start: date,
                           end: date,
                           *,
                           today: Optional[date] = None
                           ) -> AppointmentStatistics:
    check_range(start, end)
    appointments = crud_appointment.find_appointments_by_date_between(
        db, start, end)
    logger.debug("appointment report %s..%s: %d appointments", start, end,
                 len(appointments))

    statuses = _status_counts(appointments)

    def _month(w: MonthWindow) -> Dict[str, int]:
        monthly = crud_appointment.find_appointments_by_date_between(
            db, w.start, w.end)
        counts = _status_counts(monthly)
        return {
            "total": len(monthly),
            "completed": counts[STATUS_COMPLETED],
            "cancelled": counts[STATUS_CANCELLED],
            "no_show": counts[STATUS_NO_SHOW],
        }

    trends = [
        AppointmentTrendPoint(date=label, **point)
        for label, point in monthly_trend(start, end, _month)
    ]

    return AppointmentStatistics(
        period=period,
        start_date=start,
        end_date=end,
        total_appointments=len(appointments),
        completed_appointments=statuses[STATUS_COMPLETED],
        cancelled_appointments=statuses[STATUS_CANCELLED],
        no_show_appointments=statuses[STATUS_NO_SHOW],
        type_distribution=dict(Counter(a.type for a in appointments)),
        treatment_type_distribution=dict(
            Counter(a.treatment_type for a in appointments
                    if a.treatment_type is not None)),
        monthly_trends=trends,
    )


# ---------- financial ----------


def _payment_type_total(amounts: Iterable[Amount], payment_type: str) -> Decimal:
    return _sum(a.amount for a in amounts
                if (a.payment_type or "").lower() == payment_type)


def _top_procedures(appointments: List[Appointment],
                    amounts: List[Amount]) -> List[ProcedureRevenue]:
    """
    Appointment types ranked by the payments recorded against them.
    Equal revenues keep the order in which the type was first seen.
    """
    paid_by_appointment: Dict[int, Decimal] = {}
    for a in amounts:
        paid_by_appointment[a.appointment_id] = (
            paid_by_appointment.get(a.appointment_id, ZERO) + _dec(a.amount))

    groups: Dict[str, List[Appointment]] = {}
    for appt in appointments:
        groups.setdefault(appt.type, []).append(appt)

    procedures = [
        ProcedureRevenue(
            type=appt_type,
            count=len(group),
            revenue=_money(
                _sum(paid_by_appointment.get(a.id, ZERO) for a in group)),
        ) for appt_type, group in groups.items()
    ]
    return sorted(procedures, key=lambda p: p.revenue, reverse=True)


def _financial_month(db: Session, w: MonthWindow) -> Dict[str, float]:
    # appointment revenue follows the appointment date here, not the payment date
    appointments = crud_appointment.find_appointments_by_date_between(
        db, w.start, w.end)
    amounts = crud_amount.find_amounts_by_appointment_ids(
        db, [a.id for a in appointments])
    appointment_revenue = _amount_total(amounts)

    sales = crud_pharmacy.find_sales_created_between(db, *w.bounds())
    pharmacy_revenue = _sales_total(sales)

    return {
        "total_revenue": _money(appointment_revenue + pharmacy_revenue),
        "appointment_revenue": _money(appointment_revenue),
        "pharmacy_revenue": _money(pharmacy_revenue),
    }


def financial_statistics(db: Session,
                         period: str,
                         start: date,
                         end: date,
                         *,
                         today: Optional[date] = None) -> FinancialStatistics:
    check_range(start, end)
    start_dt, end_dt = day_bounds(start, end)

    amounts = crud_amount.find_amounts_created_between(db, start_dt, end_dt)
    appointment_revenue = _amount_total(amounts)

    sales = crud_pharmacy.find_sales_created_between(db, start_dt, end_dt)
    pharmacy_revenue = _sales_total(sales)

    logger.debug(
        "financial report %s..%s: %d payments, %d pharmacy sales", start, end,
        len(amounts), len(sales))

    trends = [
        FinancialTrendPoint(date=label, **point)
        for label, point in monthly_trend(
            start, end, lambda w: _financial_month(db, w))
    ]

    appointments = crud_appointment.find_appointments_by_date_between(
        db, start, end)

    return FinancialStatistics(
        period=period,
        start_date=start,
        end_date=end,
        total_revenue=_money(appointment_revenue + pharmacy_revenue),
        appointment_revenue=_money(appointment_revenue),
        pharmacy_revenue=_money(pharmacy_revenue),
        average_appointment_value=_average(appointment_revenue, len(amounts)),
        average_pharmacy_sale=_average(pharmacy_revenue, len(sales)),
        online_amount=_money(_payment_type_total(amounts, PAYMENT_ONLINE)),
        cash_amount=_money(_payment_type_total(amounts, PAYMENT_CASH)),
        top_procedures=_top_procedures(appointments, amounts),
        monthly_trends=trends,
    )


# ---------- pharmacy ----------


def _stock_alerts(medicines: Iterable[Medicine]) -> List[StockAlert]:
    reorder_point = settings.STOCK_REORDER_POINT
    return [
        StockAlert(
            medicine_id=m.id,
            medicine_name=m.name,
            current_stock=m.stock,
            reorder_point=reorder_point,
        ) for m in medicines if m.stock <= reorder_point
    ]


def _expiry_alerts(medicines: Iterable[Medicine],
                   today: date) -> List[ExpiryAlert]:
    # no lower bound: medicines that already expired keep alerting
    threshold = add_months(today, settings.EXPIRY_ALERT_MONTHS)
    return [
        ExpiryAlert(
            medicine_id=m.id,
            medicine_name=m.name,
            expiry_date=m.date_of_expiry,
        ) for m in medicines
        if m.date_of_expiry is not None and m.date_of_expiry <= threshold
    ]


def pharmacy_statistics(db: Session,
                        period: str,
                        start: date,
                        end: date,
                        *,
                        today: Optional[date] = None) -> PharmacyStatistics:
    check_range(start, end)
    today = today or today_local()
    start_dt, end_dt = day_bounds(start, end)

    sales = crud_pharmacy.find_sales_created_between(db, start_dt, end_dt)
    total_revenue = _sales_total(sales)
    logger.debug("pharmacy report %s..%s: %d sales", start, end, len(sales))

    top_rows = crud_pharmacy.get_top_selling_medicines(db, start_dt, end_dt)
    top_selling = [
        TopSellingMedicine(
            medicine_id=row.medicine_id,
            medicine_name=row.medicine_name,
            quantity=int(row.total_quantity or 0),
            revenue=_money(_dec(row.total_revenue)),
        ) for row in top_rows
    ]

    def _month(w: MonthWindow) -> Dict[str, Any]:
        monthly = [s for s in sales if w.contains(s.created_at)]
        return {
            "sales": len(monthly),
            "revenue": _money(_sales_total(monthly)),
        }

    trends = [
        PharmacyTrendPoint(date=label, **point)
        for label, point in monthly_trend(start, end, _month)
    ]

    medicines = crud_pharmacy.find_all_medicines(db)

    return PharmacyStatistics(
        period=period,
        start_date=start,
        end_date=end,
        total_sales=len(sales),
        total_revenue=_money(total_revenue),
        average_sale_value=_average(total_revenue, len(sales)),
        top_selling_medicines=top_selling,
        monthly_trends=trends,
        stock_alerts=_stock_alerts(medicines),
        expiry_alerts=_expiry_alerts(medicines, today),
    )


# builders share the signature (db, period, start, end, *, today=None);
# the appointment and financial builders ignore today
REPORT_BUILDERS = {
    "patients": patient_statistics,
    "appointments": appointment_statistics,
    "financial": financial_statistics,
    "pharmacy": pharmacy_statistics,
}
