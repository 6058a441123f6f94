from __future__ import annotations


class FormsmithError(Exception):
    """Base class for errors raised by formsmith."""


class SchemaError(FormsmithError):
    """A schema document does not have the canonical shape."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid schema")


class StoreUnavailable(FormsmithError):
    """A Store call failed (network, timeout, backend error). Not retried."""


class SchemaNotFound(FormsmithError):
    """The Store has no schema for the requested id."""

    def __init__(self, form_id: str) -> None:
        self.form_id = form_id
        super().__init__(f"form not available: {form_id}")
