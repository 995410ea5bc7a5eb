# helpdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    APP_NAME: str = "Helpdesk"
    APP_DESC: str = "Server-rendered ticket tracking"
    APP_VERSION: str = "1.0.0"

    # Ticket storage
    TICKETS_FILE: str = Field(default="./data/tickets.json")
    SEED_SAMPLE_TICKETS: bool = True
    # False restores the old behaviour: a corrupt document reads as empty
    STRICT_STORAGE: bool = True

    # Sessions
    SESSION_COOKIE_NAME: str = "helpdesk_session"
    SESSION_TTL_SECONDS: int = Field(default=86400, gt=0)
    SESSION_COOKIE_SECURE: bool = False

    LOG_LEVEL: str = "INFO"

    # Dev server (python -m helpdesk)
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    RELOAD: bool = False

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
