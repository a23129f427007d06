from fastapi import APIRouter

from invoice_ocr.api.v1 import health, invoice_ocr, suppliers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/v1", tags=["health"])
api_router.include_router(invoice_ocr.router, prefix="/v1/invoice-ocr", tags=["invoice-ocr"])
api_router.include_router(suppliers.router, prefix="/v1/suppliers", tags=["suppliers"])
