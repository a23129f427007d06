"""
Schema validation and normalization of parsed model output.

The model is asked for a fixed shape but is not trusted to respect it, so
every leaf is coerced into its canonical type here. A missing supplier or
invoice section is fatal; a missing or malformed product list is not.
"""

import logging
import math
from typing import Any

from invoice_ocr.document_extractor.errors import schema_invalid
from invoice_ocr.schemas.extraction import InvoiceHeader, InvoiceRecord, LineItem, Supplier

logger = logging.getLogger("ocr.normalizer")

REQUIRED_SECTIONS = ("supplier", "invoice", "products")

DEFAULT_UNIT = "pcs"
RECOMMENDED_UNITS = frozenset({"pcs", "kg", "m", "box", "set", "carton", "roll", "ltr", "gm"})


def to_number(value: Any) -> float:
    """Coerce to a finite float; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return 0.0
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_text(value: Any) -> str:
    """Coerce a scalar to str. None and containers become ""."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_line_item(raw: Any) -> LineItem:
    item = raw if isinstance(raw, dict) else {}
    unit = to_text(item.get("unit")).strip().lower()
    return LineItem(
        name=to_text(item.get("name")).strip(),
        quantity=to_number(item.get("quantity")),
        unit=unit or DEFAULT_UNIT,
        rate=to_number(item.get("rate")),
        hs_code=to_text(item.get("hsCode")).strip(),
    )


def _normalize_supplier(raw: dict) -> Supplier:
    return Supplier(
        name=to_text(raw.get("name")),
        contact_person=to_text(raw.get("contactPerson")),
        email=to_text(raw.get("email")),
        phone=to_text(raw.get("phone")),
        address=to_text(raw.get("address")),
        country=to_text(raw.get("country")),
    )


def _normalize_invoice_header(raw: dict) -> InvoiceHeader:
    return InvoiceHeader(
        invoice_number=to_text(raw.get("invoiceNumber")),
        date=to_text(raw.get("date")),
        total_amount=max(0.0, to_number(raw.get("totalAmount"))),
    )


def normalize_invoice(parsed: dict) -> InvoiceRecord:
    """Validate the top-level shape and coerce every field.

    Raises:
        ExtractionError: SCHEMA_INVALID when supplier, invoice or products is
            absent, or supplier/invoice is not an object.
    """
    problems = [key for key in REQUIRED_SECTIONS if parsed.get(key) is None]
    problems += [
        key
        for key in ("supplier", "invoice")
        if key not in problems and not isinstance(parsed[key], dict)
    ]
    if problems:
        logger.warning("Extracted data missing sections: %s", problems)
        raise schema_invalid(problems)

    raw_products = parsed["products"]
    if not isinstance(raw_products, list):
        logger.info("products was %s, not a list; using empty list", type(raw_products).__name__)
        raw_products = []

    products = [normalize_line_item(raw) for raw in raw_products]

    off_list = {p.unit for p in products} - RECOMMENDED_UNITS
    if off_list:
        logger.debug("Units outside the recommended set: %s", sorted(off_list))

    return InvoiceRecord(
        supplier=_normalize_supplier(parsed["supplier"]),
        invoice=_normalize_invoice_header(parsed["invoice"]),
        products=products,
    )
