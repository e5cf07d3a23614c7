from __future__ import annotations

import logging
import os
from typing import Optional

import dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_PREFIX = "SCHEMACOMPAT_"


class Settings(BaseModel):
    """Runtime settings for the harness.

    Values come from the process environment (optionally seeded from a .env
    file). An empty ``log_dir`` turns the file handler off.
    """

    codec: str = Field("json", description="Name passed to create_codec()")
    log_level: str = Field("INFO")
    log_dir: str = Field("log")

    @field_validator("log_level")
    def _known_level(cls, v: str):
        name = str(v).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {v}")
        return name

    @field_validator("codec")
    def _normalize_codec(cls, v: str):
        return str(v).strip().lower()

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(env_file: str | None = ".env") -> Settings:
    if env_file:
        dotenv.load_dotenv(env_file)
    values = {}
    for key in ("codec", "log_level", "log_dir"):
        raw = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is not None:
            values[key] = raw
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ValueError(f"invalid {ENV_PREFIX}* settings: {exc}") from exc


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the env.

    Existing loggers keep their level; call logger_util.refresh_levels() too.
    """
    global _settings
    _settings = None
