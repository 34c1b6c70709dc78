from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    # Persistence
    data_dir: str
    persist_to_disk: bool

    # Debug
    debug_log_requests: bool

    # HTTP
    cors_allow_origins: tuple[str, ...]


def get_settings() -> Settings:
    # Empty means "<project root>/data", resolved by persistence.paths.
    data_dir = os.getenv("DOCVERIFY_DATA_DIR", "").strip()

    # The registry is meant to survive restarts; turn off for throwaway runs.
    persist_to_disk = _env_bool("PERSIST_TO_DISK", True)

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    cors_allow_origins = tuple(_env_list("CORS_ALLOW_ORIGINS", ["*"]))

    return Settings(
        data_dir=data_dir,
        persist_to_disk=persist_to_disk,
        debug_log_requests=debug_log_requests,
        cors_allow_origins=cors_allow_origins,
    )
