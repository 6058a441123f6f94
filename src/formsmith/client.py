from __future__ import annotations

import logging
from typing import Any

import httpx

from formsmith.errors import SchemaNotFound, StoreUnavailable

logger = logging.getLogger(__name__)


class HTTPStore:
    """Store reached over HTTP; speaks the ``{"success", "data"}`` envelope of ``formsmith.app``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Store request failed: %s %s (%s)", method, path, exc)
            raise StoreUnavailable(f"{method} {path} failed") from exc

    @staticmethod
    def _data(response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            logger.warning("Store returned an unusable response: %s %s", response.status_code, response.url)
            raise StoreUnavailable(f"unexpected store response ({response.status_code})") from exc
        if not isinstance(body, dict) or not body.get("success"):
            raise StoreUnavailable("store reported failure")
        return body.get("data")

    async def create(self, schema: dict[str, Any]) -> str:
        data = self._data(await self._request("POST", "/forms", json=schema))
        if not isinstance(data, dict) or not data.get("id"):
            raise StoreUnavailable("store did not return a form id")
        return str(data["id"])

    async def get(self, form_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/forms/{form_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise SchemaNotFound(form_id)
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.is_success and isinstance(body, dict) and not body.get("success"):
            raise SchemaNotFound(form_id)
        data = self._data(response)
        if not isinstance(data, dict):
            raise SchemaNotFound(form_id)
        return data

    async def submit(self, response: dict[str, Any]) -> None:
        self._data(await self._request("POST", "/forms/submit", json=response))

    async def list(self) -> list[dict[str, Any]]:
        data = self._data(await self._request("GET", "/forms/responses"))
        return data if isinstance(data, list) else []
