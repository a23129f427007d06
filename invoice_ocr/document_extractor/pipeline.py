"""
Invoice extraction pipeline.

Flow:
  1. Build request payload (data URI + kind-specific instruction)
  2. Call the vision model (the only await)
  3. Classify the reply (empty / refusal)
  4. Extract the JSON object from the reply text
  5. Validate and normalize into an InvoiceRecord

Every classified failure is caught here and returned as an
ExtractionFailure; callers never see ExtractionError.
"""

import logging
import time

from invoice_ocr.config import Settings
from invoice_ocr.document_extractor.classifier import DEFAULT_REFUSAL_POLICY, RefusalPolicy, classify_reply
from invoice_ocr.document_extractor.errors import ExtractionError
from invoice_ocr.document_extractor.json_extractor import extract_json_object
from invoice_ocr.document_extractor.normalizer import normalize_invoice
from invoice_ocr.document_extractor.outcome import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
)
from invoice_ocr.document_extractor.request_builder import (
    ExtractionRequest,
    build_extraction_payload,
    decode_document_payload,
)
from invoice_ocr.schemas.extraction import DocumentKind, InvoiceRecord
from invoice_ocr.services.ocr_service import OcrService

logger = logging.getLogger("ocr.pipeline")


class ExtractionPipeline:
    """Orchestrates one extraction attempt per call."""

    def __init__(
        self,
        settings: Settings,
        ocr_service: OcrService | None = None,
        refusal_policy: RefusalPolicy = DEFAULT_REFUSAL_POLICY,
    ):
        self.settings = settings
        self.ocr_service = ocr_service or OcrService(settings)
        self.refusal_policy = refusal_policy
        self.max_upload_bytes = settings.max_upload_size_mb * 1024 * 1024

    async def extract(self, document_bytes: bytes, document_kind: DocumentKind) -> ExtractionOutcome:
        """Run the pipeline on raw document bytes."""
        start_time = time.monotonic()
        request = ExtractionRequest(document_bytes=document_bytes, document_kind=document_kind)

        try:
            record = await self._run(request)
        except ExtractionError as e:
            elapsed_ms = int((time.monotonic() - start_time) * 1000)
            logger.warning(
                "Extraction failed: kind=%s document_kind=%s detail=%s",
                e.kind.value,
                document_kind.value,
                e.detail,
            )
            return ExtractionFailure.from_error(e, document_kind, processing_time_ms=elapsed_ms)

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            "Extracted %s invoice with %d products in %dms",
            document_kind.value,
            len(record.products),
            elapsed_ms,
        )
        return ExtractionSuccess(record=record, document_kind=document_kind, processing_time_ms=elapsed_ms)

    async def extract_base64(self, payload: str | None, document_kind: DocumentKind) -> ExtractionOutcome:
        """Decode a base64 (optionally data-URI prefixed) upload, then extract."""
        try:
            document_bytes = decode_document_payload(payload, max_bytes=self.max_upload_bytes)
        except ExtractionError as e:
            logger.warning("Rejected %s upload: %s", document_kind.value, e.message)
            return ExtractionFailure.from_error(e, document_kind)

        return await self.extract(document_bytes, document_kind)

    async def _run(self, request: ExtractionRequest) -> InvoiceRecord:
        kind = request.document_kind

        # Step 1: Build
        payload = build_extraction_payload(request)
        logger.info("Sending %s document (%d bytes) to OCR model", kind.value, len(request.document_bytes))

        # Step 2: Upstream call
        reply = await self.ocr_service.complete(payload)

        # Step 3: Classify
        text = classify_reply(reply.text, kind, policy=self.refusal_policy)

        # Step 4: Extract JSON
        parsed = extract_json_object(text, kind)

        # Step 5: Validate and normalize
        return normalize_invoice(parsed)
