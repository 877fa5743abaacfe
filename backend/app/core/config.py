"""Application settings loaded from the environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = "dev"
    database_url: str = "sqlite:///./project_manager.db"
    log_level: str = "INFO"

    # When set, every request must carry `Authorization: Bearer <token>`.
    local_auth_token: str = ""

    cors_origins: str = "*"

    # Create tables on startup instead of relying on `alembic upgrade head`.
    db_auto_create: bool = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
