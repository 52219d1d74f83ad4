# FILE: dentalcare/crud/crud_patient.py
from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dentalcare.models.patient import Patient


def find_patients_created_between(db: Session, start: datetime,
                                  end: datetime) -> List[Patient]:
    """Patients registered in [start, end], both bounds inclusive."""
    stmt = (select(Patient).where(Patient.created_at >= start).where(
        Patient.created_at <= end).order_by(Patient.id))
    return list(db.scalars(stmt).all())


def count_all_patients(db: Session) -> int:
    return int(db.scalar(select(func.count(Patient.id))) or 0)
