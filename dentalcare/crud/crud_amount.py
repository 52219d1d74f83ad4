# FILE: dentalcare/crud/crud_amount.py
from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from dentalcare.models.amount import Amount


def find_amounts_created_between(db: Session, start: datetime,
                                 end: datetime) -> List[Amount]:
    """Payments received in [start, end] (payment date, not appointment date)."""
    stmt = (select(Amount).where(Amount.created_at >= start).where(
        Amount.created_at <= end).order_by(Amount.id))
    return list(db.scalars(stmt).all())


def find_amounts_by_appointment_ids(
        db: Session, appointment_ids: Sequence[int]) -> List[Amount]:
    if not appointment_ids:
        return []
    stmt = (select(Amount).where(
        Amount.appointment_id.in_(list(appointment_ids))).order_by(Amount.id))
    return list(db.scalars(stmt).all())
