# streambrain/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from streambrain.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)

    @field_validator("cors_allow_credentials", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)


class FFProbeConfig(BaseModel):
    timeout_sec: float = Field(30.0, gt=0)
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    bin: str = "ffprobe"


class AnalysisConfig(BaseModel):
    # Upper bound for a single probe as awaited by the analysis cache.
    probe_timeout_sec: float = Field(60.0, gt=0)
    # How many per-source brains the registry keeps alive.
    cache_size: int = Field(256, ge=1)


class LadderConfig(BaseModel):
    # Optional JSON file overriding the built-in quality tier table.
    tiers_file: Optional[Path] = None
    min_video_bitrate_kbps: int = Field(1, ge=1)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "streambrain"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    ladder: LadderConfig = LadderConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @computed_field  # type: ignore[misc]
    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from streambrain.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
