from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from formsmith.errors import SchemaError, SchemaNotFound, StoreUnavailable
from formsmith.responses import response_errors
from formsmith.schema import parse_schema

logger = logging.getLogger(__name__)

router = APIRouter()


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")


@router.post("/forms", tags=["forms"])
async def create_form(request: Request) -> dict[str, Any]:
    store = request.app.state.storage
    payload = await _json_body(request)
    try:
        schema = parse_schema(payload)
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=exc.errors)
    try:
        form_id = await store.create(schema.to_document())
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Failed to save form")
    return {"success": True, "data": {"id": form_id}}


@router.get("/forms/responses", tags=["responses"])
async def list_responses(request: Request) -> dict[str, Any]:
    store = request.app.state.storage
    try:
        responses = await store.list()
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Failed to fetch responses")
    return {"success": True, "data": responses}


@router.post("/forms/submit", tags=["responses"])
async def submit_response(request: Request) -> dict[str, Any]:
    store = request.app.state.storage
    payload = await _json_body(request)
    errors = response_errors(payload)
    if errors:
        raise HTTPException(status_code=400, detail=errors)
    try:
        await store.get(payload["formId"])
        await store.submit(payload)
    except SchemaNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Failed to submit response")
    return {"success": True}


@router.get("/forms/{form_id}", tags=["forms"])
async def get_form(request: Request, form_id: str) -> dict[str, Any]:
    store = request.app.state.storage
    try:
        document = await store.get(form_id)
    except SchemaNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Failed to load form")
    return {"success": True, "data": document}


@router.get("/healthz", tags=["system"])
async def healthz() -> dict[str, str]:
    return {"status": "ok"}
