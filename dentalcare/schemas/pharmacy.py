# FILE: dentalcare/schemas/pharmacy.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PharmacyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel,
                              populate_by_name=True,
                              from_attributes=True)


class PharmacySaleItemIn(PharmacyModel):
    medicine_id: int
    medicine_name: Optional[str] = None  # defaults to the medicine's current name
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)
    total_price: Decimal = Field(ge=0)


class PharmacySaleCreate(PharmacyModel):
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[PharmacySaleItemIn] = Field(min_length=1)

    subtotal: Decimal = Field(default=Decimal("0"), ge=0)
    sgst: Decimal = Field(default=Decimal("0"), ge=0)
    cgst: Decimal = Field(default=Decimal("0"), ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    total: Decimal = Field(ge=0)


class PharmacySaleItemOut(PharmacyModel):
    id: int
    medicine_id: int
    medicine_name: str
    quantity: int
    unit_price: float
    total_price: float


class PharmacySaleOut(PharmacyModel):
    id: int
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[PharmacySaleItemOut] = []
    subtotal: float
    sgst: float
    cgst: float
    discount: float
    total: float
    created_at: datetime
