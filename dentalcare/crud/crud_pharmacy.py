# FILE: dentalcare/crud/crud_pharmacy.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, selectinload

from dentalcare.models.pharmacy import Medicine, PharmacySale, PharmacySaleItem


def find_sales_created_between(db: Session, start: datetime,
                               end: datetime) -> List[PharmacySale]:
    stmt = (select(PharmacySale).options(selectinload(
        PharmacySale.items)).where(PharmacySale.created_at >= start).where(
            PharmacySale.created_at <= end).order_by(PharmacySale.id))
    return list(db.scalars(stmt).all())


def get_top_selling_medicines(db: Session, start: datetime,
                              end: datetime) -> List[Row]:
    """
    Line items of sales in [start, end] grouped by (medicine_id, medicine_name).

    Rows: (medicine_id, medicine_name, total_quantity, total_revenue),
    highest quantity first.
    """
    total_quantity = func.sum(PharmacySaleItem.quantity).label("total_quantity")
    total_revenue = func.sum(PharmacySaleItem.total_price).label("total_revenue")

    stmt = (select(
        PharmacySaleItem.medicine_id,
        PharmacySaleItem.medicine_name,
        total_quantity,
        total_revenue,
    ).join(PharmacySale, PharmacySale.id == PharmacySaleItem.sale_id).where(
        PharmacySale.created_at >= start).where(
            PharmacySale.created_at <= end).group_by(
                PharmacySaleItem.medicine_id,
                PharmacySaleItem.medicine_name,
            ).order_by(total_quantity.desc(), PharmacySaleItem.medicine_id))
    return list(db.execute(stmt).all())


def find_all_medicines(db: Session) -> List[Medicine]:
    return list(db.scalars(select(Medicine).order_by(Medicine.id)).all())


def get_medicine(db: Session, medicine_id: int) -> Optional[Medicine]:
    return db.get(Medicine, medicine_id)


def list_sales(db: Session, *, skip: int = 0,
               limit: int = 100) -> List[PharmacySale]:
    stmt = (select(PharmacySale).options(selectinload(
        PharmacySale.items)).order_by(PharmacySale.created_at.desc(),
                                      PharmacySale.id.desc()).offset(skip).limit(limit))
    return list(db.scalars(stmt).all())


def get_sale(db: Session, sale_id: int) -> Optional[PharmacySale]:
    stmt = (select(PharmacySale).options(selectinload(
        PharmacySale.items)).where(PharmacySale.id == sale_id))
    return db.scalar(stmt)
