from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    environment: str = "development"
    log_level: str = "INFO"
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    cors_origins: str = "*"

    # OCR model (OpenAI-compatible chat/completions endpoint)
    ocr_api_key: str = ""
    ocr_base_url: str = ""
    ocr_model: str = "google/gemini-3-flash-preview"
    ocr_temperature: float = 0.1
    ocr_max_tokens: int = 4096
    ocr_timeout_seconds: float = 60.0

    # Uploads
    max_upload_size_mb: int = 20

    # Sentry (optional)
    sentry_dsn: str = ""

    @property
    def ocr_configured(self) -> bool:
        return bool(self.ocr_api_key and self.ocr_base_url)

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
