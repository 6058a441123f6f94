from __future__ import annotations

from formsmith.client import HTTPStore
from formsmith.config import Settings, ensure_dirs
from formsmith.protocols import Store
from formsmith.repo_json import JSONStorage
from formsmith.repo_sqlite import SQLiteStorage


def init_storage(settings: Settings) -> Store:
    if settings.storage_backend == "http":
        return HTTPStore(settings.store_url, timeout=settings.store_timeout)
    ensure_dirs(settings)
    if settings.storage_backend == "json":
        return JSONStorage(settings.json_path)
    return SQLiteStorage(settings.sqlite_path)
