"""
Failure taxonomy for the invoice extraction pipeline.

Every stage raises ExtractionError with one of the FailureKind values below.
The pipeline catches it at its boundary and turns it into an
ExtractionFailure, so nothing here ever reaches the HTTP layer as an
unhandled exception.
"""

import enum

from invoice_ocr.schemas.extraction import DocumentKind


class FailureBucket(str, enum.Enum):
    """Which side of the request a failure is attributed to."""

    CLIENT = "client"
    SERVER = "server"


class FailureKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_ERROR = "upstream_error"
    EMPTY_REPLY = "empty_reply"
    MODEL_REFUSAL = "model_refusal"
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"
    SCHEMA_INVALID = "schema_invalid"

    @property
    def bucket(self) -> FailureBucket:
        if self in (FailureKind.UPSTREAM_UNAVAILABLE, FailureKind.UPSTREAM_ERROR):
            return FailureBucket.SERVER
        return FailureBucket.CLIENT

    @property
    def status_code(self) -> int:
        return 500 if self.bucket == FailureBucket.SERVER else 400


class ExtractionError(Exception):
    """A classified, terminal failure of one extraction attempt.

    Args:
        kind: The failure category.
        message: Human-readable text safe to show to the end user.
        detail: Operator-facing diagnostics (raw reply preview, upstream
            body). Logged, never returned to the user.
    """

    def __init__(self, kind: FailureKind, message: str, detail: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail


# --- Message helpers ---

PHOTO_HINT = "Please take a photo or screenshot of the invoice and upload it as an image instead."


def invalid_input(reason: str = "Image or PDF data is required") -> ExtractionError:
    return ExtractionError(FailureKind.INVALID_INPUT, reason)


def upstream_unavailable() -> ExtractionError:
    return ExtractionError(
        FailureKind.UPSTREAM_UNAVAILABLE,
        "OCR service is not configured",
        detail="OCR_API_KEY and OCR_BASE_URL must both be set",
    )


def upstream_error(detail: str, status_code: int | None = None) -> ExtractionError:
    prefix = f"[{status_code}] " if status_code is not None else ""
    return ExtractionError(
        FailureKind.UPSTREAM_ERROR,
        f"AI processing failed: {prefix}{detail}",
        detail=f"status={status_code} body={detail}",
    )


def empty_reply(kind: DocumentKind) -> ExtractionError:
    if kind == DocumentKind.PDF:
        message = f"The AI returned an empty response for this PDF. {PHOTO_HINT}"
    else:
        message = "The AI returned an empty response for this image. Please try again with a clearer image."
    return ExtractionError(FailureKind.EMPTY_REPLY, message, detail=f"document_kind={kind.value}")


def model_refusal(kind: DocumentKind, preview: str) -> ExtractionError:
    if kind == DocumentKind.PDF:
        message = f"The AI could not read this PDF. {PHOTO_HINT}"
    else:
        message = "The AI could not read this image. Please try a clearer photo or enter the data manually."
    return ExtractionError(FailureKind.MODEL_REFUSAL, message, detail=preview)


def no_json_found(kind: DocumentKind, preview: str) -> ExtractionError:
    if kind == DocumentKind.PDF:
        message = f"No invoice data could be extracted from this PDF. {PHOTO_HINT}"
    else:
        message = "No invoice data could be extracted from this image. Please try a clearer photo or enter the data manually."
    return ExtractionError(FailureKind.NO_JSON_FOUND, message, detail=preview)


def malformed_json(kind: DocumentKind, preview: str) -> ExtractionError:
    if kind == DocumentKind.PDF:
        message = f"Failed to parse AI response for this PDF. {PHOTO_HINT}"
    else:
        message = "Failed to parse AI response. Please try again with a clearer image or enter data manually."
    return ExtractionError(FailureKind.MALFORMED_JSON, message, detail=preview)


def schema_invalid(missing: list[str]) -> ExtractionError:
    return ExtractionError(
        FailureKind.SCHEMA_INVALID,
        "Invalid data structure extracted. Please review and enter the invoice data manually.",
        detail=f"missing or invalid sections: {', '.join(missing)}",
    )
