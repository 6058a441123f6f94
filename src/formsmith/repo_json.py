from __future__ import annotations

from contextlib import contextmanager
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Iterator

from filelock import FileLock, Timeout
from tinydb import Query, TinyDB

from formsmith.store import RepositoryStore
from formsmith.utils import parse_dt, to_iso


class JSONRepoBase:
    def __init__(self, path: Path, lock: FileLock) -> None:
        self._path = path
        self._lock = lock

    @contextmanager
    def _db(self) -> Iterator[TinyDB]:
        with self._lock:
            db = TinyDB(self._path)
            try:
                yield db
            finally:
                db.close()


class JSONFormRepo(JSONRepoBase):
    def create_form(self, form: dict[str, Any]) -> None:
        record = {
            "id": form["id"],
            "title": form["title"],
            "schema_json": form["schema_json"],
            "created_at": to_iso(form["created_at"]),
        }
        with self._db() as db:
            db.table("forms").insert(record)

    def get_form(self, form_id: str) -> dict[str, Any] | None:
        with self._db() as db:
            item = db.table("forms").get(Query().id == form_id)
        return self._from_record(item) if item else None

    @staticmethod
    def _from_record(record: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": record["id"],
            "title": record.get("title", ""),
            "schema_json": record.get("schema_json", {}),
            "created_at": parse_dt(record["created_at"]),
        }


class JSONResponseRepo(JSONRepoBase):
    def create_response(self, response: dict[str, Any]) -> None:
        record = {
            "id": response["id"],
            "form_id": response["form_id"],
            "document": response["document"],
            "submitted_at": to_iso(response["submitted_at"]),
        }
        with self._db() as db:
            db.table("responses").insert(record)

    def list_responses(self) -> list[dict[str, Any]]:
        with self._db() as db:
            items = db.table("responses").all()
        responses = [self._from_record(item) for item in items]
        return sorted(responses, key=lambda x: (x["submitted_at"], x["id"]), reverse=True)

    @staticmethod
    def _from_record(record: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": record["id"],
            "form_id": record["form_id"],
            "document": record.get("document", {}),
            "submitted_at": parse_dt(record["submitted_at"]),
        }


class JSONStorage(RepositoryStore):
    backend_errors = (OSError, JSONDecodeError, Timeout)

    def __init__(self, path: Path, lock_timeout: float = -1) -> None:
        self._lock = FileLock(f"{path}.lock", timeout=lock_timeout)
        self.forms = JSONFormRepo(path, self._lock)
        self.responses = JSONResponseRepo(path, self._lock)
