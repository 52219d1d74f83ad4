# dentalcare/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All clinic tables (patients, appointments, amounts, pharmacy) inherit from this."""
    pass


# Import all models so metadata is complete for create_all()
from dentalcare.models import (  # noqa: F401,E402
    patient,
    appointment,
    amount,
    pharmacy,
)
