from __future__ import annotations

import os
from pathlib import Path

STORAGE_BACKENDS = {"sqlite", "json", "http"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        backend = os.getenv("STORAGE_BACKEND", "sqlite").lower()
        self.storage_backend = backend if backend in STORAGE_BACKENDS else "sqlite"
        self.sqlite_path = Path(os.getenv("SQLITE_PATH", "./data/app.db"))
        self.json_path = Path(os.getenv("JSON_PATH", "./data/jsonstore.json"))
        self.store_url = os.getenv("STORE_URL", "http://localhost:5000").rstrip("/")
        self.store_timeout = _env_float("STORE_TIMEOUT", 10.0)
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = _env_int("PORT", 5000)
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


def ensure_dirs(settings: Settings) -> None:
    if settings.storage_backend == "sqlite":
        settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    elif settings.storage_backend == "json":
        settings.json_path.parent.mkdir(parents=True, exist_ok=True)
