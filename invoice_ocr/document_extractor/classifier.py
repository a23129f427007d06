"""
Reply classifier: rejects obviously unusable model replies before JSON
extraction is attempted.

A reply is a refusal only when it contains a refusal phrase AND no `{` at
all. Apologies are often incidental preamble to a perfectly good JSON object,
and a supplier that "cannot" deliver is legitimate invoice content.
"""

import logging
from dataclasses import dataclass

from invoice_ocr.document_extractor.errors import empty_reply, model_refusal
from invoice_ocr.schemas.extraction import DocumentKind

logger = logging.getLogger("ocr.classifier")

REFUSAL_PHRASES: tuple[str, ...] = (
    "cannot process",
    "unable to",
    "not able to",
    "cannot read",
    "cannot extract",
    "cannot access",
    "sorry",
    "i apologize",
    "not supported",
    "cannot view",
    "cannot see",
)

PREVIEW_CHARS = 200


@dataclass(frozen=True)
class RefusalPolicy:
    """Predicate deciding whether a reply is a refusal."""

    phrases: tuple[str, ...] = REFUSAL_PHRASES

    def matches_phrase(self, text: str) -> bool:
        lowered = text.lower()
        return any(phrase in lowered for phrase in self.phrases)

    def __call__(self, text: str) -> bool:
        return "{" not in text and self.matches_phrase(text)


DEFAULT_REFUSAL_POLICY = RefusalPolicy()


def classify_reply(
    text: str,
    document_kind: DocumentKind,
    policy: RefusalPolicy = DEFAULT_REFUSAL_POLICY,
) -> str:
    """Return the reply unchanged if it is worth parsing.

    Raises:
        ExtractionError: EMPTY_REPLY for blank text, MODEL_REFUSAL when the
            refusal policy matches.
    """
    if not text or not text.strip():
        logger.warning("Empty reply for %s document", document_kind.value)
        raise empty_reply(document_kind)

    if policy(text):
        logger.warning("Model refused %s document", document_kind.value)
        raise model_refusal(document_kind, preview=text[:PREVIEW_CHARS])

    return text
