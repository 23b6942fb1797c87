"""Configuration for the FastAPI service."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    # Speech-to-text (audio uploads are rejected when unset)
    ASSEMBLYAI_API_KEY: str = ""
    ASSEMBLYAI_BASE_URL: str = "https://api.assemblyai.com/v2"
    TRANSCRIPTION_POLL_INTERVAL_SECONDS: float = Field(default=5.0, ge=0)
    TRANSCRIPTION_MAX_POLLS: int = Field(default=60, ge=1)

    # E-mail (sharing by e-mail is rejected when unset)
    SENDGRID_API_KEY: str = ""
    SENDGRID_FROM_EMAIL: str = "noreply@example.com"
    EMAIL_DAILY_LIMIT: int = Field(default=100, ge=0)

    # Share links (0 keeps links until evicted)
    SHARE_STORE_MAX_SIZE: int = Field(default=1000, ge=1)
    SHARE_TTL_SECONDS: float = Field(default=7 * 24 * 3600, ge=0)

    # HTTP
    BASE_URL: str = "http://localhost:3001"
    FRONTEND_URL: str = "http://localhost:3000"
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = Field(default=50 * 1024 * 1024, gt=0)

    @property
    def transcription_enabled(self) -> bool:
        return bool(self.ASSEMBLYAI_API_KEY)

    @property
    def email_enabled(self) -> bool:
        return bool(self.SENDGRID_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
