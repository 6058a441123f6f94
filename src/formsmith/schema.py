from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import orjson
from jsonschema import Draft7Validator

from formsmith.errors import SchemaError
from formsmith.field_types import FieldFormat, FieldType
from formsmith.fields import Field, field_from_dict, field_to_dict

SCHEMA_DOCUMENT: dict[str, Any] = {
    "type": "object",
    "required": ["title", "fields"],
    "properties": {
        "title": {"type": "string"},
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "label", "type"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "label": {"type": "string"},
                    "type": {"enum": [t.value for t in FieldType]},
                    "required": {"type": "boolean"},
                    "format": {"enum": [f.value for f in FieldFormat]},
                    "options": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
    },
}

_validator = Draft7Validator(SCHEMA_DOCUMENT)


@dataclass(frozen=True)
class FormSchema:
    title: str
    fields: tuple[Field, ...]

    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]

    def to_document(self) -> dict[str, Any]:
        return serialize(self.fields, self.title)


def _fields_of(state: Any) -> Iterable[Field]:
    return state.fields if hasattr(state, "fields") else state


def serialize(state: Any, title: str) -> dict[str, Any]:
    """Canonical schema document for a builder state (or any sequence of fields).

    ``format`` is omitted when unset; ``options`` is present on every dropdown.
    """
    return {
        "title": str(title),
        "fields": [field_to_dict(f) for f in _fields_of(state)],
    }


def dumps_schema(document: dict[str, Any]) -> bytes:
    return orjson.dumps(document)


def schema_errors(document: Any) -> list[str]:
    errors: list[str] = []
    for error in sorted(_validator.iter_errors(document), key=lambda err: [str(p) for p in err.path]):
        location = "/".join(str(p) for p in error.path) or "document"
        errors.append(f"{location}: {error.message}")
    if errors:
        return errors

    seen_ids: set[str] = set()
    for index, raw in enumerate(document["fields"]):
        if not raw["label"].strip():
            errors.append(f"fields/{index}/label: label must not be blank")
        if raw["id"] in seen_ids:
            errors.append(f"fields/{index}/id: duplicate id {raw['id']!r}")
        seen_ids.add(raw["id"])
    return errors


def parse_schema(document: Any) -> FormSchema:
    """Rebuild a FormSchema from its canonical document. Raises ``SchemaError``."""
    if isinstance(document, (bytes, str)):
        try:
            document = orjson.loads(document)
        except orjson.JSONDecodeError as exc:
            raise SchemaError([f"document: {exc}"]) from exc
    errors = schema_errors(document)
    if errors:
        raise SchemaError(errors)
    return FormSchema(
        title=document["title"],
        fields=tuple(field_from_dict(raw) for raw in document["fields"]),
    )
