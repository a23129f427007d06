"""
Invoice OCR endpoint.

Accepts `{"imageBase64": ...}` or `{"pdfBase64": ...}` and answers with
`{"data": InvoiceRecord}` or `{"error": message}`. The status code comes from
the failure bucket: 400 for input, classification and parse failures, 500 for
configuration and upstream failures.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from invoice_ocr.dependencies import get_extraction_pipeline
from invoice_ocr.document_extractor.outcome import ExtractionFailure, encode_outcome
from invoice_ocr.document_extractor.pipeline import ExtractionPipeline
from invoice_ocr.schemas.extraction import ErrorResponse, InvoiceOcrRequest, InvoiceOcrResponse

logger = logging.getLogger("ocr.api")

router = APIRouter()


@router.post(
    "",
    response_model=InvoiceOcrResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract_invoice(
    body: InvoiceOcrRequest,
    pipeline: ExtractionPipeline = Depends(get_extraction_pipeline),
) -> JSONResponse:
    """Extract supplier, invoice header and line items from an uploaded invoice."""
    kind = body.document_kind

    try:
        outcome = await pipeline.extract_base64(body.payload, kind)
    except Exception:
        logger.exception("Invoice OCR crashed for %s document", kind.value)
        return JSONResponse(status_code=500, content={"error": "OCR processing failed"})

    if isinstance(outcome, ExtractionFailure):
        logger.info(
            "Invoice OCR failed: kind=%s status=%d detail=%s",
            outcome.kind.value,
            outcome.status_code,
            outcome.detail,
        )
    else:
        logger.info(
            "Invoice OCR succeeded: %d products in %dms",
            len(outcome.record.products),
            outcome.processing_time_ms,
        )

    return JSONResponse(status_code=outcome.status_code, content=encode_outcome(outcome))
