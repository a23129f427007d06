"""
Vision model client for invoice OCR.

Talks to any OpenAI-compatible chat/completions endpoint (OpenRouter, a
gateway in front of Gemini, OpenAI itself) using the base URL and bearer key
from settings. One call per extraction, no retries: retry policy belongs to
the caller.
"""

import logging
from dataclasses import dataclass

import openai

from invoice_ocr.config import Settings
from invoice_ocr.document_extractor.errors import upstream_error, upstream_unavailable
from invoice_ocr.document_extractor.request_builder import ExtractionPayload

logger = logging.getLogger("ocr.upstream")

EXTRACTION_SYSTEM_PROMPT = """You are an invoice data extraction expert. Extract structured data from invoice images and PDF documents and return ONLY a valid JSON object with no markdown formatting, no code blocks, no explanations. The JSON must have this exact structure:
{
  "supplier": {
    "name": "string",
    "contactPerson": "string or empty",
    "email": "string or empty",
    "phone": "string or empty",
    "address": "string or empty",
    "country": "string or empty"
  },
  "invoice": {
    "invoiceNumber": "string",
    "date": "YYYY-MM-DD",
    "totalAmount": number
  },
  "products": [
    {
      "name": "string",
      "quantity": number,
      "unit": "string (pcs/kg/m/box/set/carton/roll/ltr/gm)",
      "rate": number,
      "hsCode": "string (6-10 digits) or empty"
    }
  ]
}

Rules:
- Return ONLY the JSON object, no other text
- If a field cannot be determined, use empty string "" for strings or 0 for numbers
- Ensure all numbers are valid (not NaN or null)
- Product unit should be one of: pcs, kg, m, box, set, carton, roll, ltr, gm
- Extract HS codes if visible (usually 6-10 digit codes)
- Date format must be YYYY-MM-DD
- Supplier country should be the full country name if identifiable
- For multi-page documents, read every page and merge all line items into the single "products" array"""

# Upstream bodies can be large HTML error pages
MAX_ERROR_DETAIL_CHARS = 500


@dataclass(frozen=True)
class RawModelReply:
    """Untrusted text returned by the model for one request."""

    text: str
    model: str | None = None
    finish_reason: str | None = None


class OcrService:
    def __init__(self, settings: Settings):
        self.model = settings.ocr_model
        self.temperature = settings.ocr_temperature
        self.max_tokens = settings.ocr_max_tokens
        self.client: openai.AsyncOpenAI | None = None

        if settings.ocr_configured:
            self.client = openai.AsyncOpenAI(
                api_key=settings.ocr_api_key,
                base_url=settings.ocr_base_url,
                timeout=settings.ocr_timeout_seconds,
                max_retries=0,
            )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(self, payload: ExtractionPayload) -> RawModelReply:
        """Send one extraction request and return the model's raw text.

        Raises:
            ExtractionError: UPSTREAM_UNAVAILABLE when credentials are missing,
                UPSTREAM_ERROR for non-success responses and transport failures.
        """
        if self.client is None:
            logger.error("OCR upstream is not configured")
            raise upstream_unavailable()

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                    {"role": "user", "content": payload.content},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            body = (e.response.text if e.response is not None else "") or e.message
            logger.error("OCR upstream returned %s: %s", e.status_code, body[:MAX_ERROR_DETAIL_CHARS])
            raise upstream_error(body[:MAX_ERROR_DETAIL_CHARS], status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error("OCR upstream connection failed: %s", e)
            raise upstream_error(str(e) or "connection error") from e
        except openai.APIError as e:
            # e.g. a 200 whose body is not a chat completion
            logger.error("OCR upstream returned an unusable response: %s", e)
            raise upstream_error(e.message or "invalid upstream response") from e

        if not response.choices:
            logger.warning("OCR upstream returned no choices")
            return RawModelReply(text="", model=getattr(response, "model", None))

        choice = response.choices[0]
        text = choice.message.content or ""
        logger.info(
            "OCR reply received: %d chars (model=%s, finish_reason=%s)",
            len(text),
            response.model,
            choice.finish_reason,
        )
        return RawModelReply(text=text, model=response.model, finish_reason=choice.finish_reason)
