"""Tests for the /api/v1/invoice-ocr endpoint."""

import json

import pytest

from conftest import JPEG_BYTES, PDF_BYTES, SAMPLE_INVOICE, b64
from invoice_ocr.document_extractor.errors import upstream_unavailable
from invoice_ocr.services.ocr_service import RawModelReply

ENDPOINT = "/api/v1/invoice-ocr"


@pytest.mark.asyncio
async def test_image_upload_returns_data(client, fake_ocr_service):
    fake_ocr_service.complete.return_value = RawModelReply(text=json.dumps(SAMPLE_INVOICE))

    response = await client.post(ENDPOINT, json={"imageBase64": f"data:image/jpeg;base64,{b64(JPEG_BYTES)}"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"data"}
    assert body["data"]["supplier"]["contactPerson"] == "Lily Chen"
    assert body["data"]["invoice"]["totalAmount"] == 1530.5
    assert body["data"]["products"][1]["unit"] == "pcs"
    assert body["data"]["products"][0]["hsCode"] == "520812"


@pytest.mark.asyncio
async def test_pdf_key_selects_pdf_kind(client, fake_ocr_service):
    fake_ocr_service.complete.return_value = RawModelReply(text=json.dumps(SAMPLE_INVOICE))

    response = await client.post(ENDPOINT, json={"pdfBase64": b64(PDF_BYTES)})

    assert response.status_code == 200
    payload = fake_ocr_service.complete.call_args.args[0]
    assert payload.data_uri.startswith("data:application/pdf;base64,")


@pytest.mark.asyncio
async def test_missing_document_is_400(client, fake_ocr_service):
    response = await client.post(ENDPOINT, json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Image or PDF data is required"}
    fake_ocr_service.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_pdf_refusal_is_400_with_photo_hint(client, fake_ocr_service):
    fake_ocr_service.complete.return_value = RawModelReply(text="I'm sorry, PDF input is not supported.")

    response = await client.post(ENDPOINT, json={"pdfBase64": b64(PDF_BYTES)})

    assert response.status_code == 400
    assert "photo or screenshot" in response.json()["error"]


@pytest.mark.asyncio
async def test_schema_invalid_is_400(client, fake_ocr_service):
    fake_ocr_service.complete.return_value = RawModelReply(text='{"supplier": {}, "products": []}')

    response = await client.post(ENDPOINT, json={"imageBase64": b64(JPEG_BYTES)})

    assert response.status_code == 400
    assert "manually" in response.json()["error"]


@pytest.mark.asyncio
async def test_unconfigured_upstream_is_500(client, fake_ocr_service):
    fake_ocr_service.complete.side_effect = upstream_unavailable()

    response = await client.post(ENDPOINT, json={"imageBase64": b64(JPEG_BYTES)})

    assert response.status_code == 500
    assert response.json() == {"error": "OCR service is not configured"}


@pytest.mark.asyncio
async def test_unexpected_crash_is_500_envelope(client, fake_ocr_service):
    fake_ocr_service.complete.side_effect = RuntimeError("boom")

    response = await client.post(ENDPOINT, json={"imageBase64": b64(JPEG_BYTES)})

    assert response.status_code == 500
    assert response.json() == {"error": "OCR processing failed"}


@pytest.mark.asyncio
async def test_non_object_body_is_400_envelope(client):
    response = await client.post(ENDPOINT, json=["not", "an", "object"])

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_response_has_request_id_header(client, fake_ocr_service):
    fake_ocr_service.complete.return_value = RawModelReply(text=json.dumps(SAMPLE_INVOICE))

    response = await client.post(
        ENDPOINT,
        json={"imageBase64": b64(JPEG_BYTES)},
        headers={"X-Request-ID": "abc123"},
    )

    assert response.headers["X-Request-ID"] == "abc123"
