# hexprobe/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hexprobe.common.strings.splitters import csv_to_list, ext_list

MiB = 1024 * 1024


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
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class ProbeConfig(BaseModel):
    # Strict validation reads the whole file; anything larger is refused before reading.
    strict_max_bytes: int = Field(32 * MiB, ge=1)
    validation_max_bytes: int = Field(500 * MiB, ge=1)


class ConversionConfig(BaseModel):
    default_preset: str = "balanced"
    overwrite: bool = False
    image_exts: List[str] = Field(
        default_factory=lambda: ["png", "jpg", "jpeg", "webp", "bmp", "tif", "tiff", "heif", "heic"]
    )
    jpeg_quality: int = Field(95, ge=1, le=100)
    webp_quality: int = Field(90, ge=1, le=100)

    @field_validator("overwrite", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @field_validator("image_exts", mode="before")
    @classmethod
    def _split_exts(cls, v):
        return ext_list(v)


class MetadataConfig(BaseModel):
    sidecar_suffix: str = ".meta.json"


class ConcurrencyConfig(BaseModel):
    probe_workers: int = Field(4, ge=1, le=64)
    thread_queue_maxsize: int = 64


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "hexprobe"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    probe: ProbeConfig = ProbeConfig()
    conversion: ConversionConfig = ConversionConfig()
    metadata: MetadataConfig = MetadataConfig()
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
        from hexprobe.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings reads .env and the environment
