from __future__ import annotations

from typing import Any, Protocol


class Store(Protocol):
    """Persistence collaborator for schemas and responses.

    Every method raises ``StoreUnavailable`` on backend or transport failure;
    ``get`` raises ``SchemaNotFound`` for an unknown id. Returned documents carry
    their assigned identifier under ``"_id"``.
    """

    async def create(self, schema: dict[str, Any]) -> str: ...

    async def get(self, form_id: str) -> dict[str, Any]: ...

    async def submit(self, response: dict[str, Any]) -> None: ...

    async def list(self) -> list[dict[str, Any]]: ...


class FormRepository(Protocol):
    def create_form(self, form: dict[str, Any]) -> None: ...

    def get_form(self, form_id: str) -> dict[str, Any] | None: ...


class ResponseRepository(Protocol):
    def create_response(self, response: dict[str, Any]) -> None: ...

    def list_responses(self) -> list[dict[str, Any]]: ...
