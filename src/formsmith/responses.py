from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from jsonschema import Draft7Validator

from formsmith.errors import SchemaError
from formsmith.schema import FormSchema
from formsmith.utils import parse_dt, to_iso

RESPONSE_DOCUMENT: dict[str, Any] = {
    "type": "object",
    "required": ["formId", "answers", "submittedAt"],
    "properties": {
        "formId": {"type": "string", "minLength": 1},
        "answers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["label", "value"],
                "properties": {
                    "label": {"type": "string"},
                    "value": {"type": "string"},
                },
            },
        },
        "submittedAt": {"type": "string", "minLength": 1},
    },
}

_validator = Draft7Validator(RESPONSE_DOCUMENT)


@dataclass(frozen=True)
class Answer:
    label: str
    value: str


@dataclass(frozen=True)
class Response:
    form_id: str
    answers: tuple[Answer, ...]
    submitted_at: datetime


@dataclass(frozen=True)
class ResponseSummary:
    total: int
    unique_forms: int
    last_submitted_at: datetime | None
    recent: tuple[Response, ...]


def collect(
    schema: FormSchema,
    answers: Mapping[str, str],
    form_id: str,
    now: datetime,
) -> Response:
    """One answer per schema field, in schema order; missing answers become ``""``."""
    return Response(
        form_id=form_id,
        answers=tuple(Answer(label=f.label, value=answers.get(f.id) or "") for f in schema.fields),
        submitted_at=now,
    )


def response_to_document(response: Response) -> dict[str, Any]:
    return {
        "formId": response.form_id,
        "answers": [{"label": a.label, "value": a.value} for a in response.answers],
        "submittedAt": to_iso(response.submitted_at),
    }


def response_errors(document: Any) -> list[str]:
    errors = [
        f"{'/'.join(str(p) for p in error.path) or 'document'}: {error.message}"
        for error in sorted(_validator.iter_errors(document), key=lambda err: [str(p) for p in err.path])
    ]
    if not errors:
        try:
            parse_dt(document["submittedAt"])
        except ValueError:
            errors.append("submittedAt: not an ISO-8601 timestamp")
    return errors


def response_from_document(document: Any) -> Response:
    errors = response_errors(document)
    if errors:
        raise SchemaError(errors)
    return Response(
        form_id=document["formId"],
        answers=tuple(Answer(label=a["label"], value=a["value"]) for a in document["answers"]),
        submitted_at=parse_dt(document["submittedAt"]),
    )


def summarize(responses: Iterable[Response], recent: int = 5) -> ResponseSummary:
    items = sorted(responses, key=lambda r: r.submitted_at, reverse=True)
    return ResponseSummary(
        total=len(items),
        unique_forms=len({r.form_id for r in items}),
        last_submitted_at=items[0].submitted_at if items else None,
        recent=tuple(items[:recent]),
    )
