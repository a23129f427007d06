"""Terminal outcomes of the extraction pipeline and their response envelopes."""

from dataclasses import dataclass

from invoice_ocr.document_extractor.errors import ExtractionError, FailureBucket, FailureKind
from invoice_ocr.schemas.extraction import DocumentKind, InvoiceRecord


@dataclass(frozen=True)
class ExtractionSuccess:
    record: InvoiceRecord
    document_kind: DocumentKind
    processing_time_ms: int = 0

    @property
    def ok(self) -> bool:
        return True

    @property
    def status_code(self) -> int:
        return 200


@dataclass(frozen=True)
class ExtractionFailure:
    kind: FailureKind
    message: str
    document_kind: DocumentKind | None = None
    detail: str | None = None
    processing_time_ms: int = 0

    @classmethod
    def from_error(
        cls, error: ExtractionError, document_kind: DocumentKind | None, processing_time_ms: int = 0
    ) -> "ExtractionFailure":
        return cls(
            kind=error.kind,
            message=error.message,
            document_kind=document_kind,
            detail=error.detail,
            processing_time_ms=processing_time_ms,
        )

    @property
    def ok(self) -> bool:
        return False

    @property
    def bucket(self) -> FailureBucket:
        return self.kind.bucket

    @property
    def status_code(self) -> int:
        return self.kind.status_code


ExtractionOutcome = ExtractionSuccess | ExtractionFailure


def encode_outcome(outcome: ExtractionOutcome) -> dict:
    """Map an outcome to `{"data": ...}` or `{"error": ...}`."""
    if isinstance(outcome, ExtractionSuccess):
        return {"data": outcome.record.to_wire()}
    return {"error": outcome.message}
