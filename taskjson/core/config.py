"""Application configuration via pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "task-json-recovery"
    app_version: str = "1.0.0"
    app_env: str = "development"

    # 0 disables the limit
    max_input_chars: int = 200_000

    host: str = "127.0.0.1"
    port: int = 8000

    api_key: Optional[str] = None
    log_level: str = "INFO"
    log_json: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
