from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from invoice_ocr.config import APP_VERSION, Settings
from invoice_ocr.dependencies import get_settings
from invoice_ocr.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    # Upstream credentials are the only hard requirement
    configured = settings.ocr_configured

    return HealthResponse(
        status="healthy" if configured else "degraded",
        upstream_configured=configured,
        model=settings.ocr_model,
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version=APP_VERSION,
    )
