from invoice_ocr.schemas.extraction import (
    DocumentKind,
    ErrorResponse,
    InvoiceHeader,
    InvoiceOcrRequest,
    InvoiceOcrResponse,
    InvoiceRecord,
    LineItem,
    Supplier,
)
from invoice_ocr.schemas.health import HealthResponse
from invoice_ocr.schemas.supplier import SupplierMatchRequest, SupplierMatchResponse, SupplierRef

__all__ = [
    "DocumentKind",
    "ErrorResponse",
    "HealthResponse",
    "InvoiceHeader",
    "InvoiceOcrRequest",
    "InvoiceOcrResponse",
    "InvoiceRecord",
    "LineItem",
    "Supplier",
    "SupplierMatchRequest",
    "SupplierMatchResponse",
    "SupplierRef",
]
