"""Run the API with uvicorn: `python -m invoice_ocr`."""

import uvicorn

from invoice_ocr.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "invoice_ocr.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
