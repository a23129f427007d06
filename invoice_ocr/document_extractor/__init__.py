from invoice_ocr.document_extractor.classifier import RefusalPolicy, classify_reply
from invoice_ocr.document_extractor.errors import ExtractionError, FailureBucket, FailureKind
from invoice_ocr.document_extractor.json_extractor import extract_json_object
from invoice_ocr.document_extractor.normalizer import normalize_invoice
from invoice_ocr.document_extractor.outcome import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    encode_outcome,
)
from invoice_ocr.document_extractor.request_builder import (
    ExtractionPayload,
    ExtractionRequest,
    build_extraction_payload,
    decode_document_payload,
)

__all__ = [
    "ExtractionError",
    "ExtractionFailure",
    "ExtractionOutcome",
    "ExtractionPayload",
    "ExtractionRequest",
    "ExtractionSuccess",
    "FailureBucket",
    "FailureKind",
    "RefusalPolicy",
    "build_extraction_payload",
    "classify_reply",
    "decode_document_payload",
    "encode_outcome",
    "extract_json_object",
    "normalize_invoice",
]
