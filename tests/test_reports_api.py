from datetime import date, datetime
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlalchemy.exc import OperationalError

from dentalcare.api.deps import get_db
from dentalcare.crud import crud_appointment
from dentalcare.main import app
from dentalcare.services import report_service

JAN = {"period": "monthly", "startDate": "2024-01-01", "endDate": "2024-01-31"}


@pytest.fixture()
def clinic(make):
    p = make.patient(datetime(2024, 1, 10), gender="female",
                     date_of_birth=date(1995, 3, 3))
    a1 = make.appointment(p, date(2024, 1, 11), "cleaning", "completed")
    make.appointment(p, date(2024, 1, 25), "checkup", "no-show")
    make.amount(a1, "150.00", "online", datetime(2024, 1, 11, 10, 0))
    make.sale(datetime(2024, 1, 12, 10, 0), "45.00")


def test_health(client):
    r = client.get("/")

    assert r.status_code == 200
    assert "message" in r.json()


def test_patient_report_uses_camel_case(client, clinic):
    r = client.get("/api/reports/patients", params=JAN)

    assert r.status_code == 200
    data = r.json()
    assert data["period"] == "monthly"
    assert data["startDate"] == "2024-01-01"
    assert data["endDate"] == "2024-01-31"
    assert data["newPatients"] == 1
    assert data["returningPatients"] == 1
    assert data["genderDistribution"] == {"male": 0, "female": 1, "other": 0}
    assert data["monthlyTrends"] == [
        {"date": "2024-01", "newPatients": 1, "returningPatients": 1}
    ]


def test_appointment_report(client, clinic):
    r = client.get("/api/reports/appointments", params=JAN)

    assert r.status_code == 200
    data = r.json()
    assert data["totalAppointments"] == 2
    assert data["completedAppointments"] == 1
    assert data["noShowAppointments"] == 1
    assert data["monthlyTrends"][0]["noShow"] == 1


def test_financial_report(client, clinic):
    r = client.get("/api/reports/financial", params=JAN)

    assert r.status_code == 200
    data = r.json()
    assert data["totalRevenue"] == 195.0
    assert data["appointmentRevenue"] == 150.0
    assert data["pharmacyRevenue"] == 45.0
    assert data["onlineAmount"] == 150.0
    assert data["cashAmount"] == 0
    assert data["topProcedures"][0] == {
        "type": "cleaning",
        "count": 1,
        "revenue": 150.0
    }


def test_pharmacy_report(client, clinic):
    r = client.get("/api/reports/pharmacy", params=JAN)

    assert r.status_code == 200
    data = r.json()
    assert data["totalSales"] == 1
    assert data["averageSaleValue"] == 45.0
    assert data["stockAlerts"] == []
    assert data["expiryAlerts"] == []


@pytest.mark.parametrize("missing", ["period", "startDate", "endDate"])
def test_missing_query_parameter(client, missing):
    params = {k: v for k, v in JAN.items() if k != missing}

    r = client.get("/api/reports/patients", params=params)

    assert r.status_code == 422
    assert r.json()["error"]["msg"] == "Validation error"


def test_malformed_date(client):
    r = client.get("/api/reports/financial",
                   params={**JAN, "startDate": "01/01/2024"})

    assert r.status_code == 422


@pytest.mark.parametrize("kind", ["patients", "appointments", "financial", "pharmacy"])
def test_start_after_end_is_a_bad_request(client, kind):
    r = client.get(f"/api/reports/{kind}",
                   params={**JAN, "startDate": "2024-02-01"})

    assert r.status_code == 400
    body = r.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "invalid_range"


def test_query_failure_maps_to_generic_500(db, monkeypatch):

    def boom(*args, **kwargs):
        raise OperationalError("SELECT ...", {}, Exception("lost connection"))

    def _get_db():
        yield db

    monkeypatch.setattr(crud_appointment, "find_appointments_by_date_between",
                        boom)
    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/api/reports/appointments", params=JAN)
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json()["error"] == {
        "msg": "Internal server error",
        "code": None,
        "details": None,
    }


def test_unexpected_error_maps_to_500(db, monkeypatch):

    def boom(*args, **kwargs):
        raise ValueError("bad row")

    def _get_db():
        yield db

    monkeypatch.setattr(report_service, "financial_statistics", boom)
    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/api/reports/financial", params=JAN)
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json()["error"]["msg"] == "Internal server error"


# ---------- export ----------


def test_financial_export(client, clinic):
    r = client.get("/api/reports/financial/export", params=JAN)

    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    assert ('filename="financial_report_2024-01-01_2024-01-31.xlsx"'
            in r.headers["content-disposition"])

    wb = load_workbook(BytesIO(r.content))
    assert wb.sheetnames == ["Summary", "topProcedures", "monthlyTrends"]

    summary = {
        row[0]: row[1]
        for row in wb["Summary"].iter_rows(min_row=2, values_only=True)
    }
    assert summary["period"] == "monthly"
    assert summary["startDate"] == "2024-01-01"
    assert summary["totalRevenue"] == 195.0

    trends = list(wb["monthlyTrends"].iter_rows(values_only=True))
    assert trends[0] == ("date", "totalRevenue", "appointmentRevenue",
                         "pharmacyRevenue")
    assert trends[1] == ("2024-01", 195.0, 150.0, 45.0)


def test_patient_export_has_a_sheet_per_mapping(client, clinic):
    r = client.get("/api/reports/patients/export", params=JAN)

    wb = load_workbook(BytesIO(r.content))
    assert wb.sheetnames == ["Summary", "genderDistribution", "monthlyTrends"]
    rows = list(wb["genderDistribution"].iter_rows(values_only=True))
    assert rows == [("Key", "Count"), ("male", 0), ("female", 1), ("other", 0)]


def test_export_of_empty_lists(client):
    r = client.get("/api/reports/pharmacy/export", params=JAN)

    wb = load_workbook(BytesIO(r.content))
    assert wb["topSellingMedicines"]["A1"].value == "No data"


def test_export_unknown_report(client):
    r = client.get("/api/reports/billing/export", params=JAN)

    assert r.status_code == 422


def test_export_rejects_bad_range(client):
    r = client.get("/api/reports/pharmacy/export",
                   params={**JAN, "endDate": "2023-12-31"})

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "invalid_range"


def test_report_ending_in_year_9999(client):
    r = client.get("/api/reports/financial",
                   params={**JAN, "startDate": "9999-12-01", "endDate": "9999-12-31"})

    assert r.status_code == 200
    assert [t["date"] for t in r.json()["monthlyTrends"]] == ["9999-12"]
