# dentalcare/db/init_db.py
from __future__ import annotations

import argparse
import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dentalcare.db.session import engine
from dentalcare.db.base import Base
from dentalcare.models.pharmacy import Medicine
from dentalcare.services.month_windows import add_months
from dentalcare.utils.timezone import today_local

logger = logging.getLogger(__name__)


def print_tables() -> set[str]:
    names = set(inspect(engine).get_table_names())
    print("Existing tables:", sorted(names))
    return names


def seed_medicines(db: Session, today: date) -> int:
    """
    Seed a small demo formulary; safe to run multiple times
    (skips names that already exist).
    """
    DEMO = [
        # name, type, unit, price, stock, months to expiry
        ("Amoxicillin 500mg", "capsule", "strip", "85.00", 120, 18),
        ("Ibuprofen 400mg", "tablet", "strip", "32.50", 15, 12),
        ("Chlorhexidine Mouthwash", "liquid", "bottle", "140.00", 40, 2),
        ("Lidocaine 2% Gel", "gel", "tube", "95.00", 8, 24),
        ("Metronidazole 400mg", "tablet", "strip", "28.00", 60, -1),
    ]

    existing = set(db.scalars(select(Medicine.name)).all())
    added = 0
    for name, mtype, unit, price, stock, months in DEMO:
        if name in existing:
            continue
        db.add(
            Medicine(
                name=name,
                type=mtype,
                unit=unit,
                price=Decimal(price),
                stock=stock,
                date_of_expiry=add_months(today, months),
            ))
        added += 1
    return added


def run(fresh: bool = False, seed: bool = False) -> None:
    if fresh:
        print("WARNING: Dropping ALL tables (dev only) …")
        Base.metadata.drop_all(bind=engine)

    print("Creating all missing tables …")
    Base.metadata.create_all(bind=engine)
    print_tables()

    if not seed:
        return

    try:
        with Session(engine) as db:
            added = seed_medicines(db, today_local())
            db.commit()
            print(f"Demo medicines seeded ({added} inserted).")
    except SQLAlchemyError as e:
        logger.exception("Seeding failed")
        print("Seeding failed:", e)
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Initialize DB (create tables, optionally seed demo data).")
    parser.add_argument(
        "--fresh",
        action="store_true",
        help="Drop & recreate all tables (DEV ONLY).",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Insert demo medicines.",
    )
    args = parser.parse_args()
    run(fresh=args.fresh, seed=args.seed)
