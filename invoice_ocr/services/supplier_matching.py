"""
Matches an extracted supplier name against suppliers the caller already has,
so the review screen can offer "use existing" instead of creating a duplicate.
"""

from collections.abc import Iterable

from invoice_ocr.schemas.supplier import SupplierRef


def _key(name: str) -> str:
    return name.strip().lower()


def find_similar_supplier(name: str, suppliers: Iterable[SupplierRef]) -> SupplierRef | None:
    """Return the first supplier whose name equals, contains or is contained in `name`.

    Comparison is case-insensitive and ignores surrounding whitespace. Blank
    names on either side never match.
    """
    wanted = _key(name)
    if not wanted:
        return None

    for supplier in suppliers:
        candidate = _key(supplier.name)
        if not candidate:
            continue
        if candidate == wanted or wanted in candidate or candidate in wanted:
            return supplier
    return None
