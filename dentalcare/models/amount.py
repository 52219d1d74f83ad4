# FILE: dentalcare/models/amount.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship

from dentalcare.db.base import Base
from dentalcare.utils.timezone import now_local


class Amount(Base):
    """
    A payment received against an appointment.

    One appointment may carry several Amount rows (partial payments).
    created_at is the payment date, not the appointment date.
    """

    __tablename__ = "amounts"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(
        Integer,
        ForeignKey("appointments.id"),
        nullable=False,
        index=True,
    )
    patient_id = Column(
        Integer,
        ForeignKey("patients.id"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_type = Column(String(16), nullable=False)  # cash / online
    created_at = Column(DateTime, nullable=False, default=now_local, index=True)

    appointment = relationship("Appointment", back_populates="amounts")
