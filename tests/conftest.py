import os

# must be set before dentalcare.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from dentalcare.api.deps import get_db  # noqa: E402
from dentalcare.db.base import Base  # noqa: E402
from dentalcare.db.session import SessionLocal, engine  # noqa: E402
from dentalcare.main import app  # noqa: E402
from dentalcare.models import (  # noqa: E402
    Amount,
    Appointment,
    Medicine,
    Patient,
    PharmacySale,
    PharmacySaleItem,
)


class Factory:
    """Small helpers to put rows in the test database."""

    def __init__(self, db):
        self.db = db
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def patient(self, created_at: datetime, **kw) -> Patient:
        n = self._next()
        kw.setdefault("first_name", f"Patient{n}")
        kw.setdefault("email", f"patient{n}@example.com")
        kw.setdefault("gender", "male")
        return self._save(Patient(created_at=created_at, **kw))

    def appointment(self, patient: Patient, on: date, type: str = "checkup",
                    status: str = "scheduled", **kw) -> Appointment:
        return self._save(
            Appointment(patient_id=patient.id,
                        date=on,
                        type=type,
                        status=status,
                        **kw))

    def amount(self, appointment: Appointment, amount, payment_type: str,
               created_at: datetime) -> Amount:
        return self._save(
            Amount(appointment_id=appointment.id,
                   patient_id=appointment.patient_id,
                   amount=Decimal(str(amount)),
                   payment_type=payment_type,
                   created_at=created_at))

    def medicine(self, name: str, stock: int, expiry=None, **kw) -> Medicine:
        kw.setdefault("price", Decimal("10.00"))
        return self._save(
            Medicine(name=name, stock=stock, date_of_expiry=expiry, **kw))

    def sale(self, created_at: datetime, total, items=()) -> PharmacySale:
        """items: (medicine, quantity, total_price) tuples"""
        sale = PharmacySale(total=Decimal(str(total)),
                            subtotal=Decimal(str(total)),
                            created_at=created_at)
        for med, qty, line_total in items:
            sale.items.append(
                PharmacySaleItem(
                    medicine_id=med.id,
                    medicine_name=med.name,
                    quantity=qty,
                    unit_price=Decimal(str(line_total)) / qty,
                    total_price=Decimal(str(line_total)),
                ))
        return self._save(sale)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def make(db):
    return Factory(db)


@pytest.fixture()
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
