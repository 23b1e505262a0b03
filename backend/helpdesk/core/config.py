"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from helpdesk.core.exceptions import InvalidConfigurationError

BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_SESSION_SECRET = "change-me"


class Settings(BaseSettings):
    APP_NAME: str = "Helpdesk Tickets"
    ENV: str = "development"

    DATABASE_URL: str = "postgresql+psycopg://postgres@localhost:5432/helpdesk"

    # Sessions are issued by the external identity provider; we only verify them.
    SESSION_JWT_SECRET: str = DEFAULT_SESSION_SECRET
    SESSION_JWT_ALGORITHM: str = "HS256"
    SESSION_JWT_AUDIENCE: str = ""
    SESSION_COOKIE_NAME: str = "hd_session"
    LOG_LEVEL: str = "INFO"

    LOGIN_PATH: str = "/login"
    CORS_ORIGINS: str = "http://localhost:5173"

    model_config = SettingsConfigDict(env_file=str(BASE_DIR / ".env"), env_file_encoding="utf-8")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def session_audience(self) -> str | None:
        return self.SESSION_JWT_AUDIENCE.strip() or None

    @property
    def is_development(self) -> bool:
        return self.ENV.strip().lower() in {"development", "dev", "local", "test"}

    def validate_runtime_security(self) -> None:
        if self.is_development:
            return
        if not self.SESSION_JWT_SECRET or self.SESSION_JWT_SECRET == DEFAULT_SESSION_SECRET:
            raise InvalidConfigurationError("session_secret_not_configured", setting="SESSION_JWT_SECRET")


settings = Settings()
