# FILE: dentalcare/models/pharmacy.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Date,
    DateTime,
    Text,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from dentalcare.db.base import Base
from dentalcare.utils.timezone import now_local


class Medicine(Base):
    __tablename__ = "medicines"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_medicine_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(64), nullable=False, default="tablet")
    description = Column(Text, nullable=True)
    manufacturer = Column(String(255), nullable=True)

    stock = Column(Integer, nullable=False, default=0)
    unit = Column(String(32), nullable=False, default="strip")
    price = Column(Numeric(12, 2), nullable=False, default=0)

    date_of_mfg = Column(Date, nullable=True)
    date_of_expiry = Column(Date, nullable=True)

    created_at = Column(DateTime, nullable=False, default=now_local)
    updated_at = Column(DateTime,
                        nullable=False,
                        default=now_local,
                        onupdate=now_local)


class PharmacySale(Base):
    """
    Counter sale of medicines.

    total is the authoritative revenue figure; all money columns are
    rounded to 2 dp when the sale is created.
    """

    __tablename__ = "pharmacy_sales"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=True)
    customer_phone = Column(String(20), nullable=True)

    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    sgst = Column(Numeric(14, 2), nullable=False, default=0)
    cgst = Column(Numeric(14, 2), nullable=False, default=0)
    discount = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=now_local, index=True)

    items = relationship(
        "PharmacySaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="PharmacySaleItem.id",
    )


class PharmacySaleItem(Base):
    """
    Line items for PharmacySale.
    """

    __tablename__ = "pharmacy_sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer,
                     ForeignKey("pharmacy_sales.id", ondelete="CASCADE"),
                     nullable=False,
                     index=True)

    # medicine_name is a snapshot taken at sale time
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False)
    medicine_name = Column(String(255), nullable=False)

    quantity = Column(Integer, nullable=False, default=0)
    unit_price = Column(Numeric(14, 2), nullable=False, default=0)
    total_price = Column(Numeric(14, 2), nullable=False, default=0)

    sale = relationship("PharmacySale", back_populates="items")
