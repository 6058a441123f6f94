from __future__ import annotations

from typing import Any

import pytest

from formsmith.errors import SchemaNotFound, StoreUnavailable
from formsmith.schema import parse_schema


class MemoryStore:
    """In-process Store that records the order of calls."""

    def __init__(self) -> None:
        self.forms: dict[str, dict[str, Any]] = {}
        self.responses: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self.failing: set[str] = set()

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failing:
            raise StoreUnavailable(f"{name} unavailable")

    async def create(self, schema: dict[str, Any]) -> str:
        self._enter("create")
        form_id = f"form-{len(self.forms) + 1}"
        self.forms[form_id] = dict(schema)
        return form_id

    async def get(self, form_id: str) -> dict[str, Any]:
        self._enter("get")
        if form_id not in self.forms:
            raise SchemaNotFound(form_id)
        return {**self.forms[form_id], "_id": form_id}

    async def submit(self, response: dict[str, Any]) -> None:
        self._enter("submit")
        self.responses.insert(0, {**response, "_id": f"resp-{len(self.responses) + 1}"})

    async def list(self) -> list[dict[str, Any]]:
        self._enter("list")
        return [dict(item) for item in self.responses]


@pytest.fixture
def scenario_document() -> dict[str, Any]:
    return {
        "title": "T",
        "fields": [
            {"id": "f1", "type": "text", "label": "Name", "required": True},
            {
                "id": "f2",
                "type": "dropdown",
                "label": "Color",
                "required": False,
                "options": ["Red", "Blue"],
            },
        ],
    }


@pytest.fixture
def scenario_schema(scenario_document):
    return parse_schema(scenario_document)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()
