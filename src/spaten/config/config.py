"""Configuration management."""

from __future__ import annotations

import os
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from spaten.core.constants import MAX_BODY_LENGTH


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class ReaderConfig(BaseModel):
    """SPATEN reader configuration."""

    max_block_size: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_BODY_LENGTH,
        description="Largest block body accepted, in bytes (None = no limit)",
    )
    log_level: str = Field(
        "INFO",
        description="Log level name: DEBUG, INFO, WARNING, ERROR",
    )
    json_logs: bool = Field(
        False,
        description="Render logs as JSON instead of console output",
    )

    @classmethod
    def from_env(cls) -> "ReaderConfig":
        return cls(
            max_block_size=_env_int("SPATEN_MAX_BLOCK_SIZE"),
            log_level=os.getenv("SPATEN_LOG_LEVEL", "INFO"),
            json_logs=os.getenv("SPATEN_JSON_LOGS", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, path: str) -> "ReaderConfig":
        with open(path, "r", encoding="utf-8") as fh:
            data: Any = yaml.safe_load(fh)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return cls(**data)


__all__ = ["ReaderConfig"]
