"""Runtime settings (environment variables with the SCHEMABRIDGE_ prefix).

Only the CLI and logging setup read settings; the codec, versioning and
type-name layers take everything they need as arguments.
"""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCHEMABRIDGE_",
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_show_path: bool = False
    cli_indent: int = 2

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return "WARNING"
        value = str(v).strip().upper()
        if value not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {v!r}")
        return value

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def get_settings() -> Settings:
    """Fresh settings read from the current environment."""
    return Settings()
