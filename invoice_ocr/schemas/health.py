from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    upstream_configured: bool
    model: str
    timestamp: datetime
    environment: str
    version: str
