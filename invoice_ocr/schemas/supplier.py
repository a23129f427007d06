from pydantic import BaseModel, Field


class SupplierRef(BaseModel):
    """A supplier the caller already knows about."""

    id: str
    name: str


class SupplierMatchRequest(BaseModel):
    name: str = Field(..., description="Supplier name as extracted from the invoice")
    suppliers: list[SupplierRef] = Field(default_factory=list)


class SupplierMatchResponse(BaseModel):
    match: SupplierRef | None = None
