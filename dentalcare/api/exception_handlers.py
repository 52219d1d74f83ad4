# FILE: dentalcare/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dentalcare.api.response import err
from dentalcare.services.pharmacy_sale_service import (
    InsufficientStock,
    MedicineNotFound,
    PharmacySaleError,
)
from dentalcare.services.report_errors import InvalidRange

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg=msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return err(msg="Validation error", status_code=422)

    @app.exception_handler(InvalidRange)
    async def invalid_range_handler(request: Request, exc: InvalidRange) -> JSONResponse:
        return err(msg=str(exc), status_code=400, code="invalid_range")

    @app.exception_handler(MedicineNotFound)
    async def medicine_not_found_handler(request: Request, exc: MedicineNotFound) -> JSONResponse:
        return err(msg=str(exc), status_code=404, code="medicine_not_found")

    @app.exception_handler(InsufficientStock)
    async def insufficient_stock_handler(request: Request, exc: InsufficientStock) -> JSONResponse:
        return err(
            msg=str(exc),
            status_code=400,
            code="insufficient_stock",
            details={
                "medicineId": exc.medicine_id,
                "available": exc.available,
                "requested": exc.requested,
            },
        )

    @app.exception_handler(PharmacySaleError)
    async def pharmacy_sale_error_handler(request: Request, exc: PharmacySaleError) -> JSONResponse:
        return err(msg=str(exc), status_code=400, code="pharmacy_sale_error")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return err(msg="Internal server error", status_code=500)
