import enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentKind(str, enum.Enum):
    """Kind of uploaded document; decides the mime hint and instruction text."""

    IMAGE = "image"
    PDF = "pdf"

    @property
    def mime_type(self) -> str:
        if self == DocumentKind.PDF:
            return "application/pdf"
        return "image/jpeg"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Invoice record ---


class Supplier(_CamelModel):
    name: str = Field("", description="Supplier company name")
    contact_person: str = Field("", alias="contactPerson", description="Contact person name")
    email: str = Field("", description="Email address")
    phone: str = Field("", description="Phone number")
    address: str = Field("", description="Full address")
    country: str = Field("", description="Full country name")


class InvoiceHeader(_CamelModel):
    invoice_number: str = Field("", alias="invoiceNumber", description="Invoice reference number")
    date: str = Field("", description="Invoice date, YYYY-MM-DD")
    total_amount: float = Field(0.0, alias="totalAmount", ge=0, description="Invoice total")


class LineItem(_CamelModel):
    name: str = Field("", description="Product name")
    quantity: float = Field(0.0, description="Quantity")
    unit: str = Field("pcs", description="Unit, usually pcs/kg/m/box/set/carton/roll/ltr/gm")
    rate: float = Field(0.0, description="Price per unit")
    hs_code: str = Field("", alias="hsCode", description="HS code, usually 6-10 digits")


class InvoiceRecord(_CamelModel):
    """Normalized result of one extraction. No field can hold null or NaN."""

    supplier: Supplier = Field(default_factory=Supplier)
    invoice: InvoiceHeader = Field(default_factory=InvoiceHeader)
    products: list[LineItem] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# --- HTTP request/response bodies ---


class InvoiceOcrRequest(_CamelModel):
    image_base64: str | None = Field(None, alias="imageBase64")
    pdf_base64: str | None = Field(None, alias="pdfBase64")

    @property
    def document_kind(self) -> DocumentKind:
        return DocumentKind.PDF if self.pdf_base64 else DocumentKind.IMAGE

    @property
    def payload(self) -> str:
        return (self.pdf_base64 if self.pdf_base64 else self.image_base64) or ""


class InvoiceOcrResponse(BaseModel):
    data: InvoiceRecord


class ErrorResponse(BaseModel):
    error: str
