from fastapi import APIRouter

from invoice_ocr.schemas.supplier import SupplierMatchRequest, SupplierMatchResponse
from invoice_ocr.services.supplier_matching import find_similar_supplier

router = APIRouter()


@router.post("/match", response_model=SupplierMatchResponse)
async def match_supplier(body: SupplierMatchRequest) -> SupplierMatchResponse:
    """Find an existing supplier similar to an extracted supplier name."""
    return SupplierMatchResponse(match=find_similar_supplier(body.name, body.suppliers))
