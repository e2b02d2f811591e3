from __future__ import annotations

"""Runtime configuration helpers for clipfinder."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_ACR_HOST = "identify-us-west-2.acrcloud.com"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class AcrCloudSettings:
    host: str
    access_key: str | None
    access_secret: str | None
    timeout_ms: int

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key and self.access_secret)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass(frozen=True)
class UploadSettings:
    max_bytes: int


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    cors_allow_origins: tuple[str, ...]
    static_dir: str | None
    log_level: str


@dataclass(frozen=True)
class Settings:
    server: ServerSettings
    acrcloud: AcrCloudSettings
    upload: UploadSettings


def load_settings(*, dotenv: bool = True) -> Settings:
    """Load settings from environment variables (and ``.env``) with defaults."""

    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    server_settings = ServerSettings(
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3001),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", ("*",)),
        static_dir=_env_str("STATIC_DIR", "public"),
        log_level=(_env_str("LOG_LEVEL", "INFO") or "INFO").upper(),
    )

    acr_settings = AcrCloudSettings(
        host=_env_str("ACR_HOST", DEFAULT_ACR_HOST),
        access_key=_env_str("ACR_ACCESS_KEY"),
        access_secret=_env_str("ACR_ACCESS_SECRET"),
        timeout_ms=_env_int("ACR_TIMEOUT_MS", 10000),
    )

    upload_settings = UploadSettings(
        max_bytes=_env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
    )

    return Settings(
        server=server_settings,
        acrcloud=acr_settings,
        upload=upload_settings,
    )


__all__ = [
    "Settings",
    "ServerSettings",
    "AcrCloudSettings",
    "UploadSettings",
    "load_settings",
    "DEFAULT_ACR_HOST",
    "DEFAULT_MAX_UPLOAD_BYTES",
]
