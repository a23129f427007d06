from invoice_ocr.config import Settings, settings
from invoice_ocr.document_extractor.pipeline import ExtractionPipeline
from invoice_ocr.services.ocr_service import OcrService


def get_settings() -> Settings:
    return settings


def get_ocr_service() -> OcrService:
    return OcrService(settings)


def get_extraction_pipeline() -> ExtractionPipeline:
    return ExtractionPipeline(settings)
