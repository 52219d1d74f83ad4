# FILE: dentalcare/models/patient.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Text,
)
from sqlalchemy.orm import relationship

from dentalcare.db.base import Base
from dentalcare.utils.timezone import now_local


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=True)
    email = Column(String(191), unique=True, index=True, nullable=True)
    phone = Column(String(20), index=True, nullable=True)

    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(16), nullable=True)  # male / female / other
    address = Column(String(255), nullable=True)

    medical_history = Column(Text, nullable=True)
    insurance_info = Column(String(255), nullable=True)

    created_at = Column(DateTime, nullable=False, default=now_local, index=True)
    last_visit = Column(DateTime, nullable=True)

    appointments = relationship("Appointment", back_populates="patient")

    def __repr__(self) -> str:
        return f"<Patient id={self.id} name={self.first_name!r}>"
