"""Builder/respondent workflows over an injected Store.

Each workflow turns Store errors into an ``Outcome`` carrying one user-facing
message. Nothing is retried; the user re-triggers the action.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

from formsmith.builder import SchemaBuilder
from formsmith.errors import SchemaError, SchemaNotFound, StoreUnavailable
from formsmith.protocols import Store
from formsmith.responses import (
    Response,
    ResponseSummary,
    collect,
    response_from_document,
    response_to_document,
    summarize,
)
from formsmith.schema import FormSchema, parse_schema
from formsmith.utils import now_utc
from formsmith.validation import ValidationFailure, validate

logger = logging.getLogger(__name__)

FORM_SAVED = "Form saved"
SAVE_FAILED = "Failed to save form"
FORM_NOT_AVAILABLE = "Form not available"
LOAD_FAILED = "Failed to load form"
RESPONSE_SUBMITTED = "Response submitted!"
SUBMIT_FAILED = "Failed to submit response"
LIST_FAILED = "Failed to fetch responses"


@dataclass(frozen=True)
class Outcome:
    ok: bool
    message: str = ""
    form_id: str | None = None
    schema: FormSchema | None = None
    failure: ValidationFailure | None = None
    response: Response | None = None
    responses: tuple[Response, ...] = ()


async def save_form(store: Store, builder: SchemaBuilder, title: str) -> Outcome:
    document = builder.serialize(title)
    try:
        form_id = await store.create(document)
    except StoreUnavailable:
        return Outcome(ok=False, message=SAVE_FAILED)
    return Outcome(ok=True, message=FORM_SAVED, form_id=form_id)


async def load_form(store: Store, form_id: str) -> Outcome:
    try:
        document = await store.get(form_id)
    except SchemaNotFound:
        return Outcome(ok=False, message=FORM_NOT_AVAILABLE, form_id=form_id)
    except StoreUnavailable:
        return Outcome(ok=False, message=LOAD_FAILED, form_id=form_id)
    try:
        schema = parse_schema(document)
    except SchemaError as exc:
        logger.warning("Stored form %s is malformed: %s", form_id, exc)
        return Outcome(ok=False, message=FORM_NOT_AVAILABLE, form_id=form_id)
    return Outcome(ok=True, form_id=form_id, schema=schema)


async def submit_response(
    store: Store,
    schema: FormSchema,
    form_id: str,
    answers: Mapping[str, str],
    now: datetime | None = None,
) -> Outcome:
    """Validate, collect and submit; the Store is not called when validation fails."""
    result = validate(schema, answers)
    if result.failure is not None:
        return Outcome(ok=False, message=result.failure.message, form_id=form_id, failure=result.failure)
    response = collect(schema, result.answers, form_id, now or now_utc())
    try:
        await store.submit(response_to_document(response))
    except StoreUnavailable:
        return Outcome(ok=False, message=SUBMIT_FAILED, form_id=form_id)
    return Outcome(ok=True, message=RESPONSE_SUBMITTED, form_id=form_id, response=response)


async def list_responses(store: Store) -> Outcome:
    try:
        documents = await store.list()
    except StoreUnavailable:
        return Outcome(ok=False, message=LIST_FAILED)
    responses: list[Response] = []
    for document in documents:
        try:
            responses.append(response_from_document(document))
        except SchemaError as exc:
            logger.warning("Skipping malformed response %s: %s", document.get("_id"), exc)
    return Outcome(ok=True, responses=tuple(responses))


async def submit_and_refresh(
    store: Store,
    schema: FormSchema,
    form_id: str,
    answers: Mapping[str, str],
    now: datetime | None = None,
) -> tuple[Outcome, Outcome | None]:
    """Submit, then list only once the submit has been acknowledged."""
    submitted = await submit_response(store, schema, form_id, answers, now)
    if not submitted.ok:
        return submitted, None
    return submitted, await list_responses(store)


async def load_summary(store: Store, recent: int = 5) -> tuple[Outcome, ResponseSummary]:
    listed = await list_responses(store)
    return listed, summarize(listed.responses, recent=recent)
