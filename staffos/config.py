"""Client configuration via environment variables."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # API
    API_BASE_URL: str = "http://localhost:3001"
    API_PREFIX: str = "/api"

    # Session / CSRF (cookie-based, set by the server on login)
    SESSION_COOKIE_NAME: str = "HeadOfficeOS_sid"
    SESSION_COOKIE: str = ""
    CSRF_COOKIE_NAME: str = "staffos_csrf"
    CSRF_HEADER_NAME: str = "X-CSRF-Token"

    # HTTP behaviour
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    MAX_RETRIES: int = 3
    RETRY_BACKOFF_SECONDS: float = 1.0

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "warning"
    TIMEZONE: str = "Europe/London"

    @property
    def api_root(self) -> str:
        """Origin plus prefix, without a trailing slash."""
        return f"{self.API_BASE_URL.rstrip('/')}/{self.API_PREFIX.strip('/')}".rstrip("/")

    def now(self) -> datetime:
        return datetime.now(ZoneInfo(self.TIMEZONE))

    def today(self) -> date:
        return self.now().date()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
