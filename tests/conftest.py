import base64
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from invoice_ocr.config import Settings
from invoice_ocr.document_extractor.pipeline import ExtractionPipeline
from invoice_ocr.services.ocr_service import OcrService, RawModelReply

SAMPLE_INVOICE = {
    "supplier": {
        "name": "Guangzhou Bright Textiles Co., Ltd.",
        "contactPerson": "Lily Chen",
        "email": "sales@brighttextiles.cn",
        "phone": "+86 20 8888 1234",
        "address": "88 Huangpu Road, Guangzhou",
        "country": "China",
    },
    "invoice": {
        "invoiceNumber": "BT-2026-0412",
        "date": "2026-04-12",
        "totalAmount": 1530.5,
    },
    "products": [
        {"name": "Cotton Fabric Roll", "quantity": 10, "unit": "roll", "rate": 120.0, "hsCode": "520812"},
        {"name": "Polyester Thread", "quantity": 50, "unit": "PCS", "rate": 6.61, "hsCode": "540110"},
    ],
}

# Smallest valid JPEG/PDF prefixes are enough: the model call is mocked
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-body"
PDF_BYTES = b"%PDF-1.4 fake test content"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ocr_api_key="test-key",
        ocr_base_url="https://ocr.example.test/v1",
        ocr_model="test/vision-model",
        ocr_temperature=0.1,
        ocr_max_tokens=4096,
        max_upload_size_mb=1,
    )


@pytest.fixture
def fake_ocr_service():
    """OcrService stand-in whose reply text each test sets."""
    service = MagicMock(spec=OcrService)
    service.complete = AsyncMock(return_value=RawModelReply(text=""))
    return service


@pytest.fixture
def pipeline(test_settings, fake_ocr_service) -> ExtractionPipeline:
    return ExtractionPipeline(test_settings, ocr_service=fake_ocr_service)


@pytest.fixture
async def client(pipeline):
    from invoice_ocr.dependencies import get_extraction_pipeline
    from invoice_ocr.main import app

    app.dependency_overrides[get_extraction_pipeline] = lambda: pipeline

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def make_completion(content: str | None, model: str = "test/vision-model", finish_reason: str = "stop"):
    """Create a mock chat.completions response."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    choice.finish_reason = finish_reason
    response = MagicMock()
    response.choices = [choice]
    response.model = model
    return response
