"""
Recovers a single JSON object from free-form model output.

Models wrap JSON in code fences, prefix it with prose ("Here is the data:")
or append commentary after it. Extraction runs in two passes:

1. A bracket-depth scan (aware of string literals and escapes) over the
   top-level `{` candidates. The first balanced candidate that parses wins.
2. The greedy first-`{`-to-last-`}` span. It only decides the failure kind:
   a greedy span that parses is always the balanced candidate starting at
   the first `{`, which pass 1 already returned. So no span at all is
   NO_JSON_FOUND and a span that is there but unparseable is MALFORMED_JSON.
"""

import json
import logging
import re
from collections.abc import Iterator

from invoice_ocr.document_extractor.errors import malformed_json, no_json_found
from invoice_ocr.schemas.extraction import DocumentKind

logger = logging.getLogger("ocr.json_extractor")

# ``` or ```json / ```JSON / ```javascript, opening or closing
_CODE_FENCE = re.compile(r"```[A-Za-z0-9_+-]*")
_GREEDY_SPAN = re.compile(r"\{[\s\S]*\}")

PREVIEW_CHARS = 200


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text).strip()


def _find_closing_brace(text: str, start: int) -> int | None:
    """Index of the `}` closing the object opened at `start`, or None."""
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i

    return None


def iter_balanced_objects(text: str) -> Iterator[str]:
    """Yield each top-level balanced `{...}` substring, left to right.

    Stops at the first `{` that never closes: everything after it is part
    of that unclosed object.
    """
    start = text.find("{")
    while start != -1:
        end = _find_closing_brace(text, start)
        if end is None:
            return
        yield text[start : end + 1]
        start = text.find("{", end + 1)


def _loads_object(candidate: str) -> dict | None:
    try:
        parsed = json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_object(text: str, document_kind: DocumentKind) -> dict:
    """Find and parse the JSON object embedded in a model reply.

    Raises:
        ExtractionError: NO_JSON_FOUND when the text holds no `{...}` span,
            MALFORMED_JSON when a span exists but does not parse.
    """
    cleaned = strip_code_fences(text)
    preview = text[:PREVIEW_CHARS]

    for candidate in iter_balanced_objects(cleaned):
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed

    match = _GREEDY_SPAN.search(cleaned)
    if match is None:
        logger.warning("No JSON object in %s reply", document_kind.value)
        raise no_json_found(document_kind, preview=preview)

    logger.warning("Malformed JSON in %s reply", document_kind.value)
    raise malformed_json(document_kind, preview=preview)
