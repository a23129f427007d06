"""
Request builder: turns uploaded document bytes into the message payload sent
to the vision model.

Images are sent as `image/jpeg` data URIs, PDFs as `application/pdf` data
URIs. The user instruction differs by kind: PDF instructions ask the model to
merge the line items of every page into one array.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass

from invoice_ocr.document_extractor.errors import invalid_input
from invoice_ocr.schemas.extraction import DocumentKind

logger = logging.getLogger("ocr.request_builder")

IMAGE_INSTRUCTION = "Extract all invoice data from this image and return the JSON object."

PDF_INSTRUCTION = (
    "Extract all invoice data from this PDF document and return the JSON object. "
    "The document may have multiple pages: read every page and combine the line items "
    "of all pages into a single products array, in the order they appear."
)

# data:image/png;base64,....  /  data:application/pdf;base64,....
_DATA_URI_PREFIX = re.compile(r"^data:[^,]*?,", re.IGNORECASE)


@dataclass(frozen=True)
class ExtractionRequest:
    """One upload attempt: raw document bytes plus their kind."""

    document_bytes: bytes
    document_kind: DocumentKind

    @classmethod
    def from_base64(
        cls, payload: str, document_kind: DocumentKind, max_bytes: int | None = None
    ) -> "ExtractionRequest":
        return cls(
            document_bytes=decode_document_payload(payload, max_bytes=max_bytes),
            document_kind=document_kind,
        )


@dataclass(frozen=True)
class ExtractionPayload:
    """Everything the upstream client needs besides the system prompt."""

    document_kind: DocumentKind
    instruction: str
    data_uri: str

    @property
    def content(self) -> list[dict]:
        """Chat message content array (text part, then the document)."""
        return [
            {"type": "text", "text": self.instruction},
            {"type": "image_url", "image_url": {"url": self.data_uri}},
        ]


def decode_document_payload(payload: str | None, max_bytes: int | None = None) -> bytes:
    """Decode a base64 upload, tolerating a leading `data:` URI prefix.

    Raises:
        ExtractionError: INVALID_INPUT for blank, undecodable or oversized
            payloads.
    """
    if not payload or not payload.strip():
        raise invalid_input()

    encoded = _DATA_URI_PREFIX.sub("", payload.strip(), count=1)
    encoded = "".join(encoded.split())

    try:
        document_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise invalid_input("Document data is not valid base64") from e

    if not document_bytes:
        raise invalid_input()

    if max_bytes is not None and len(document_bytes) > max_bytes:
        raise invalid_input(f"Document is too large. Maximum size is {max_bytes / (1024 * 1024):g} MB.")

    return document_bytes


def build_extraction_payload(request: ExtractionRequest) -> ExtractionPayload:
    """Assemble the instruction text and data URI for one document."""
    if not request.document_bytes:
        raise invalid_input()

    kind = request.document_kind
    encoded = base64.standard_b64encode(request.document_bytes).decode("ascii")
    instruction = PDF_INSTRUCTION if kind == DocumentKind.PDF else IMAGE_INSTRUCTION

    logger.debug("Built %s payload (%d bytes)", kind.value, len(request.document_bytes))

    return ExtractionPayload(
        document_kind=kind,
        instruction=instruction,
        data_uri=f"data:{kind.mime_type};base64,{encoded}",
    )
