# FILE: dentalcare/models/appointment.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship

from dentalcare.db.base import Base
from dentalcare.utils.timezone import now_local


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appt_patient_date", "patient_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.id"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False, index=True)
    time = Column(String(16), nullable=True)  # "10:30"
    type = Column(String(64), nullable=False)  # checkup / cleaning / root-canal ...
    status = Column(String(30), nullable=False,
                    default="scheduled")  # scheduled / completed / cancelled / no-show
    treatment_type = Column(String(64), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=now_local)

    patient = relationship("Patient", back_populates="appointments")
    amounts = relationship("Amount", back_populates="appointment")
