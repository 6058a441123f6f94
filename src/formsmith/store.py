from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from formsmith.errors import SchemaError, SchemaNotFound, StoreUnavailable
from formsmith.protocols import FormRepository, ResponseRepository
from formsmith.responses import response_errors
from formsmith.utils import new_ulid, now_utc, parse_dt

logger = logging.getLogger(__name__)


def _without_id(document: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in document.items() if key != "_id"}


class RepositoryStore:
    """Store contract on top of a form repository and a response repository."""

    forms: FormRepository
    responses: ResponseRepository
    backend_errors: tuple[type[BaseException], ...] = (OSError,)

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except self.backend_errors as exc:
            logger.exception("Store %s failed", action)
            raise StoreUnavailable(f"store {action} failed") from exc

    async def create(self, schema: dict[str, Any]) -> str:
        form_id = new_ulid()
        document = _without_id(schema)
        with self._guard("create"):
            self.forms.create_form(
                {
                    "id": form_id,
                    "title": document.get("title", ""),
                    "schema_json": document,
                    "created_at": now_utc(),
                }
            )
        logger.info("Created form %s with %d fields", form_id, len(document.get("fields", [])))
        return form_id

    async def get(self, form_id: str) -> dict[str, Any]:
        with self._guard("get"):
            form = self.forms.get_form(form_id)
        if form is None:
            raise SchemaNotFound(form_id)
        return {**form["schema_json"], "_id": form["id"]}

    async def submit(self, response: dict[str, Any]) -> None:
        document = _without_id(response)
        errors = response_errors(document)
        if errors:
            raise SchemaError(errors)
        response_id = new_ulid()
        with self._guard("submit"):
            self.responses.create_response(
                {
                    "id": response_id,
                    "form_id": document["formId"],
                    "document": document,
                    "submitted_at": parse_dt(document["submittedAt"]),
                }
            )
        logger.info("Stored response %s for form %s", response_id, document["formId"])

    async def list(self) -> list[dict[str, Any]]:
        with self._guard("list"):
            rows = self.responses.list_responses()
        return [{**row["document"], "_id": row["id"]} for row in rows]
