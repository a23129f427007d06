"""Tests for outcome envelopes and failure buckets."""

from invoice_ocr.document_extractor.errors import FailureBucket, FailureKind, malformed_json
from invoice_ocr.document_extractor.outcome import ExtractionFailure, ExtractionSuccess, encode_outcome
from invoice_ocr.schemas.extraction import DocumentKind, InvoiceRecord, LineItem

CLIENT_KINDS = {
    FailureKind.INVALID_INPUT,
    FailureKind.EMPTY_REPLY,
    FailureKind.MODEL_REFUSAL,
    FailureKind.NO_JSON_FOUND,
    FailureKind.MALFORMED_JSON,
    FailureKind.SCHEMA_INVALID,
}


def test_success_envelope():
    record = InvoiceRecord(products=[LineItem(name="Widget", quantity=2, rate=3.5)])
    envelope = encode_outcome(ExtractionSuccess(record=record, document_kind=DocumentKind.IMAGE))

    assert set(envelope) == {"data"}
    assert envelope["data"]["products"][0] == {
        "name": "Widget",
        "quantity": 2.0,
        "unit": "pcs",
        "rate": 3.5,
        "hsCode": "",
    }
    assert envelope["data"]["invoice"] == {"invoiceNumber": "", "date": "", "totalAmount": 0.0}


def test_failure_envelope_is_message_only():
    failure = ExtractionFailure.from_error(malformed_json(DocumentKind.IMAGE, preview="raw"), DocumentKind.IMAGE)
    assert encode_outcome(failure) == {"error": failure.message}
    assert failure.detail == "raw"


def test_buckets():
    for kind in FailureKind:
        expected = FailureBucket.CLIENT if kind in CLIENT_KINDS else FailureBucket.SERVER
        assert kind.bucket == expected
        assert kind.status_code == (400 if kind in CLIENT_KINDS else 500)
