# FILE: dentalcare/services/pharmacy_sale_service.py
from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from dentalcare.crud import crud_pharmacy
from dentalcare.models.pharmacy import Medicine, PharmacySale, PharmacySaleItem
from dentalcare.schemas.pharmacy import PharmacySaleCreate

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


class PharmacySaleError(RuntimeError):
    pass


class MedicineNotFound(PharmacySaleError):
    def __init__(self, medicine_id: int):
        self.medicine_id = medicine_id
        super().__init__(f"Medicine {medicine_id} not found")


class InsufficientStock(PharmacySaleError):
    def __init__(self, medicine: Medicine, requested: int):
        self.medicine_id = medicine.id
        self.available = medicine.stock
        self.requested = requested
        super().__init__(f"Insufficient stock for {medicine.name}: "
                         f"requested {requested}, available {medicine.stock}")


def round2(val: Any) -> Decimal:
    return Decimal(str(val or 0)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _take_stock(db: Session, medicine_id: int, quantity: int) -> Medicine:
    med = crud_pharmacy.get_medicine(db, medicine_id)
    if med is None:
        raise MedicineNotFound(medicine_id)
    if med.stock < quantity:
        raise InsufficientStock(med, quantity)

    # guarded decrement: never lets stock drop below zero
    res = db.execute(
        update(Medicine).where(Medicine.id == medicine_id).where(
            Medicine.stock >= quantity).values(stock=Medicine.stock -
                                               quantity))
    if res.rowcount != 1:
        db.refresh(med)
        raise InsufficientStock(med, quantity)
    return med


def create_sale(db: Session, payload: PharmacySaleCreate) -> PharmacySale:
    """
    Record a counter sale.

    Stock for every line is decremented first; any missing medicine or
    short stock aborts the whole sale. Money fields are stored rounded
    to 2 dp.
    """
    try:
        sale = PharmacySale(
            customer_name=payload.customer_name,
            customer_phone=payload.customer_phone,
            subtotal=round2(payload.subtotal),
            sgst=round2(payload.sgst),
            cgst=round2(payload.cgst),
            discount=round2(payload.discount),
            total=round2(payload.total),
        )
        for line in payload.items:
            med = _take_stock(db, line.medicine_id, line.quantity)
            sale.items.append(
                PharmacySaleItem(
                    medicine_id=med.id,
                    medicine_name=line.medicine_name or med.name,
                    quantity=line.quantity,
                    unit_price=round2(line.unit_price),
                    total_price=round2(line.total_price),
                ))

        db.add(sale)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(sale)
    logger.info("pharmacy sale %s recorded: %d items, total %s", sale.id,
                len(sale.items), sale.total)
    return sale
