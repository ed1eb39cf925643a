"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union, Optional


DEFAULT_SESSION_SECRET = "change-me-session-secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Mood Journal"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./moodjournal.db"
    DB_ECHO: bool = False

    # Session
    SESSION_SECRET: str = DEFAULT_SESSION_SECRET
    SESSION_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "moodjournal_session"
    SESSION_EXPIRE_DAYS: int = 7
    OAUTH_STATE_COOKIE_NAME: str = "moodjournal_oauth_state"
    OAUTH_STATE_EXPIRE_MINUTES: int = 10
    COOKIE_SECURE: bool = False

    # Google OAuth
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_CALLBACK_URL: str = "http://localhost:8000/auth/google/callback"
    OAUTH_TIMEOUT_SECONDS: float = 10.0

    # Client
    CLIENT_URL: str = "http://localhost:8000/app/"
    AUTH_FAILURE_URL: Optional[str] = None
    CLIENT_DIR: str = ""  # Defaults to the bundled app/static page

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def auth_failure_url(self) -> str:
        """Where a failed login lands; defaults to the client with a flag."""
        return self.AUTH_FAILURE_URL or f"{self.CLIENT_URL}?auth=failed"

    @property
    def google_configured(self) -> bool:
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
