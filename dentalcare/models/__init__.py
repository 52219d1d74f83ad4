# dentalcare/models/__init__.py
from .patient import Patient
from .appointment import Appointment
from .amount import Amount
from .pharmacy import Medicine, PharmacySale, PharmacySaleItem

__all__ = [
    "Patient",
    "Appointment",
    "Amount",
    "Medicine",
    "PharmacySale",
    "PharmacySaleItem",
]
