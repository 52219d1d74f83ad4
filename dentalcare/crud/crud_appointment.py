# FILE: dentalcare/crud/crud_appointment.py
from __future__ import annotations

from datetime import date
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dentalcare.models.appointment import Appointment


def find_appointments_by_date_between(db: Session, start: date,
                                      end: date) -> List[Appointment]:
    """Appointments whose calendar date lies in [start, end]."""
    stmt = (select(Appointment).where(Appointment.date >= start).where(
        Appointment.date <= end).order_by(Appointment.id))
    return list(db.scalars(stmt).all())


def find_appointments_by_patient_id(db: Session,
                                    patient_id: int) -> List[Appointment]:
    stmt = (select(Appointment).where(
        Appointment.patient_id == patient_id).order_by(Appointment.date,
                                                       Appointment.id))
    return list(db.scalars(stmt).all())


def count_patients_with_multiple_appointments(db: Session, start: date,
                                              end: date) -> int:
    """
    Number of distinct patients holding more than one appointment
    dated inside [start, end].
    """
    per_patient = (select(Appointment.patient_id).where(
        Appointment.date >= start).where(Appointment.date <= end).group_by(
            Appointment.patient_id).having(
                func.count(Appointment.id) > 1).subquery())
    return int(
        db.scalar(select(func.count()).select_from(per_patient)) or 0)
