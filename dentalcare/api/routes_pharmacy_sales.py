# FILE: dentalcare/api/routes_pharmacy_sales.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dentalcare.api.deps import get_db
from dentalcare.crud import crud_pharmacy
from dentalcare.schemas.pharmacy import PharmacySaleCreate, PharmacySaleOut
from dentalcare.services import pharmacy_sale_service

router = APIRouter()


@router.get("", response_model=List[PharmacySaleOut])
def list_sales(
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=500),
        db: Session = Depends(get_db),
) -> List[PharmacySaleOut]:
    return crud_pharmacy.list_sales(db, skip=skip, limit=limit)


@router.get("/{sale_id}", response_model=PharmacySaleOut)
def get_sale(sale_id: int, db: Session = Depends(get_db)) -> PharmacySaleOut:
    sale = crud_pharmacy.get_sale(db, sale_id)
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale


@router.post("", response_model=PharmacySaleOut, status_code=201)
def create_sale(
        payload: PharmacySaleCreate,
        db: Session = Depends(get_db),
) -> PharmacySaleOut:
    """
    Counter sale. Stock is decremented per line; short stock rejects the
    whole sale with 400, an unknown medicine with 404.
    """
    return pharmacy_sale_service.create_sale(db, payload)
