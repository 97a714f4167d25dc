# -*- coding: utf-8 -*-
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HYPERBOLIC_BASE_URL = "https://api.hyperbolic.xyz/v1"


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


class VConfig(BaseSettings):
    """Project configuration loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=str(_project_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---------- Logging ----------
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # ---------- Credentials ----------
    keys_file: str = Field("keys.json", validation_alias="KEYS_FILE")

    # ---------- Hyperbolic ----------
    hyperbolic_base_url: str = Field(DEFAULT_HYPERBOLIC_BASE_URL, validation_alias="HYPERBOLIC_BASE_URL")
    hyperbolic_timeout_seconds: int = Field(60, validation_alias="HYPERBOLIC_TIMEOUT_SECONDS", ge=1)

    @field_validator("hyperbolic_base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, v):
        # "" -> default endpoint
        if v is None:
            return DEFAULT_HYPERBOLIC_BASE_URL
        if isinstance(v, str) and not v.strip():
            return DEFAULT_HYPERBOLIC_BASE_URL
        return v.strip().rstrip("/") if isinstance(v, str) else v

    @field_validator("keys_file", mode="before")
    @classmethod
    def _normalize_keys_file(cls, v):
        if v is None:
            return "keys.json"
        if isinstance(v, str) and not v.strip():
            return "keys.json"
        return v


@lru_cache(maxsize=1)
def get_config() -> VConfig:
    return VConfig()


vconfig = get_config()
