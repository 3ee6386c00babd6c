"""Editor settings loaded from ~/.routing-studio/config.json and environment variables."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routing_studio.config.constants import (
    CONFIG_FILE,
    DEFAULT_DEBOUNCE_MS,
    LOG_LEVELS,
    ROUTING_STUDIO_HOME,
    UI_CONFIG_FILE,
)


class Settings(BaseSettings):
    """Editor settings.

    Priority (highest → lowest):
      1. Environment variables (ROUTING_STUDIO_ prefix)
      2. .env file
      3. ~/.routing-studio/config.json
      4. Defaults defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="ROUTING_STUDIO_",
        env_file=(".env", str(ROUTING_STUDIO_HOME / ".env")),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    debounce_ms: int = Field(default=DEFAULT_DEBOUNCE_MS, ge=0)
    ui_config_file: str = str(UI_CONFIG_FILE)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values: dict) -> dict:
        """Merge config.json values as defaults (env vars still override)."""
        if CONFIG_FILE.exists():
            try:
                file_data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
                if isinstance(file_data, dict):
                    values = {**file_data, **{k: v for k, v in values.items() if v is not None}}
            except (json.JSONDecodeError, OSError):
                pass
        return values

    @property
    def ui_config_path(self) -> Path:
        return Path(self.ui_config_file).expanduser()

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
