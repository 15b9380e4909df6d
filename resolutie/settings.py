from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DB_FILENAME = "resolutie_local.db"


def default_local_database_url() -> str:
    # relative to the working directory, never the installed package
    return f"sqlite:///{os.path.join(os.getcwd(), DB_FILENAME)}"


class Settings(BaseSettings):
    api_base_url: str = Field("", alias="API_BASE_URL")
    backend_session_secret: str = Field("", alias="BACKEND_SESSION_SECRET")
    local_database_url: str = Field(default_factory=default_local_database_url, alias="RESOLUTIE_LOCAL_DB_URL")
    request_timeout: int = Field(10, alias="RESOLUTIE_REQUEST_TIMEOUT")
    log_level: str = Field("INFO", alias="RESOLUTIE_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def remote_configured(self) -> bool:
        return bool(self.api_base_url.strip() and self.backend_session_secret.strip())


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
