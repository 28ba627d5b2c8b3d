from __future__ import annotations

"""Runtime configuration helpers for setlist-relay."""

import os
from dataclasses import dataclass

_BOOL_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_MAX_UPLOAD_BYTES = 25 * 1024 * 1024
DEFAULT_AUDIOTAG_API_URL = "https://audiotag.info/api"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _BOOL_TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    log_level: str
    max_upload_bytes: int
    cors_origins: tuple[str, ...]


@dataclass(frozen=True)
class AudioTagSettings:
    api_url: str
    api_token: str | None
    timeout: float


@dataclass(frozen=True)
class RecognitionSettings:
    provider: str
    audiotag: AudioTagSettings
    mock_match: bool


@dataclass(frozen=True)
class Settings:
    server: ServerSettings
    recognition: RecognitionSettings


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""

    server_settings = ServerSettings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        cors_origins=_env_list("CORS_ORIGINS", ("*",)),
    )

    audiotag_settings = AudioTagSettings(
        api_url=os.getenv("AUDIOTAG_API_URL", DEFAULT_AUDIOTAG_API_URL),
        api_token=os.getenv("AUDIOTAG_API_TOKEN") or None,
        timeout=_env_float("AUDIOTAG_TIMEOUT_SECONDS", 30.0),
    )

    recognition_settings = RecognitionSettings(
        provider=os.getenv("RECOGNITION_PROVIDER", "audiotag"),
        audiotag=audiotag_settings,
        mock_match=_env_bool("MOCK_MATCH", True),
    )

    return Settings(server=server_settings, recognition=recognition_settings)


__all__ = [
    "Settings",
    "ServerSettings",
    "AudioTagSettings",
    "RecognitionSettings",
    "DEFAULT_MAX_UPLOAD_BYTES",
    "DEFAULT_AUDIOTAG_API_URL",
    "load_settings",
]
