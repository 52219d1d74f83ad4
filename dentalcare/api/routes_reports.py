# FILE: dentalcare/api/routes_reports.py
from __future__ import annotations

from datetime import date
from io import BytesIO

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from dentalcare.api.deps import get_db
from dentalcare.schemas.report import (
    AppointmentStatistics,
    FinancialStatistics,
    PatientStatistics,
    PharmacyStatistics,
    ReportKind,
)
from dentalcare.services import report_service
from dentalcare.services.excel_export import build_report_excel

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ReportQuery:
    """
    Common query string for every report:
    ?period=monthly&startDate=YYYY-MM-DD&endDate=YYYY-MM-DD

    period is accepted for the frontend's benefit only; trends are always monthly.
    """

    def __init__(
        self,
        period: str = Query(...),
        start_date: date = Query(..., alias="startDate"),
        end_date: date = Query(..., alias="endDate"),
    ):
        self.period = period
        self.start_date = start_date
        self.end_date = end_date


@router.get("/patients", response_model=PatientStatistics)
def get_patient_statistics(
        q: ReportQuery = Depends(),
        db: Session = Depends(get_db),
) -> PatientStatistics:
    return report_service.patient_statistics(db, q.period, q.start_date,
                                             q.end_date)


@router.get("/appointments", response_model=AppointmentStatistics)
def get_appointment_statistics(
        q: ReportQuery = Depends(),
        db: Session = Depends(get_db),
) -> AppointmentStatistics:
    return report_service.appointment_statistics(db, q.period, q.start_date,
                                                 q.end_date)


@router.get("/financial", response_model=FinancialStatistics)
def get_financial_statistics(
        q: ReportQuery = Depends(),
        db: Session = Depends(get_db),
) -> FinancialStatistics:
    return report_service.financial_statistics(db, q.period, q.start_date,
                                               q.end_date)


@router.get("/pharmacy", response_model=PharmacyStatistics)
def get_pharmacy_statistics(
        q: ReportQuery = Depends(),
        db: Session = Depends(get_db),
) -> PharmacyStatistics:
    return report_service.pharmacy_statistics(db, q.period, q.start_date,
                                              q.end_date)


@router.get("/{kind}/export")
def export_report(
        kind: ReportKind,
        q: ReportQuery = Depends(),
        db: Session = Depends(get_db),
) -> StreamingResponse:
    """
    Download any report as an .xlsx workbook.

    Full URL: GET /api/reports/{kind}/export?period=..&startDate=..&endDate=..
    """
    build = report_service.REPORT_BUILDERS[kind]
    report = build(db, q.period, q.start_date, q.end_date)

    buf = BytesIO()
    build_report_excel(buf, report)
    buf.seek(0)

    filename = f"{kind}_report_{q.start_date}_{q.end_date}.xlsx"
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
