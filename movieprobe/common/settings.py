# movieprobe/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ffprobe prints "Unsupported codec ..." at warning level
_PROBE_LOG_LEVELS = ("warning", "info", "verbose", "debug", "trace")


class FFProbeConfig(BaseModel):
    bin: str = "ffprobe"
    timeout_sec: int = 30
    log_level: str = "info"  # warning|info|verbose|debug|trace

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_level(cls, v):
        s = str(v or "info").strip().lower()
        if s not in _PROBE_LOG_LEVELS:
            raise ValueError(f"ffprobe log_level must be one of {', '.join(_PROBE_LOG_LEVELS)}")
        return s


class HTTPConfig(BaseModel):
    max_redirect_attempts: int = Field(10, ge=0)
    timeout_sec: float = 10.0
    method: str = "GET"  # body is never read
    user_agent: str = "movieprobe"

    @field_validator("method", mode="before")
    @classmethod
    def _upper(cls, v):
        return str(v or "GET").strip().upper()


class ConcurrencyConfig(BaseModel):
    probe_workers: int = Field(4, ge=1, le=64)


class Settings(BaseSettings):
    # -------- App --------
    app_name: str = "movieprobe"
    log_level: str = "INFO"

    # -------- Sub-configs --------
    ffprobe: FFProbeConfig = FFProbeConfig()
    http: HTTPConfig = HTTPConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from movieprobe.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
