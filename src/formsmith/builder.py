from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from dataclasses import field as dataclass_field
from typing import Any, Iterable, Mapping, Union

from formsmith.field_types import FieldType, accepts, parse_field_type, parse_format
from formsmith.fields import DropdownField, Field, make_field, normalize_options
from formsmith.schema import FormSchema, serialize
from formsmith.utils import generate_field_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuilderState:
    fields: tuple[Field, ...] = ()
    # Unsaved option text per dropdown field id; never serialized.
    option_drafts: Mapping[str, str] = dataclass_field(default_factory=dict)

    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]

    def find(self, field_id: str) -> Field | None:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None


@dataclass(frozen=True)
class AddField:
    field_type: FieldType | str
    field_id: str | None = None
    label: str | None = None


@dataclass(frozen=True)
class UpdateField:
    field_id: str
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class RemoveField:
    field_id: str


@dataclass(frozen=True)
class AddOption:
    field_id: str
    text: str


@dataclass(frozen=True)
class RemoveOption:
    field_id: str
    index: int


@dataclass(frozen=True)
class SetOptionDraft:
    field_id: str
    text: str


Command = Union[AddField, UpdateField, RemoveField, AddOption, RemoveOption, SetOptionDraft]


def _replace_field(state: BuilderState, updated: Field) -> BuilderState:
    fields = tuple(updated if f.id == updated.id else f for f in state.fields)
    return replace(state, fields=fields)


def _without_draft(drafts: Mapping[str, str], field_id: str) -> dict[str, str]:
    return {key: value for key, value in drafts.items() if key != field_id}


def apply_changes(current: Field, changes: Mapping[str, Any]) -> Field:
    """Apply attribute changes to a field, skipping ones its type does not accept.

    ``id`` and ``type`` are immutable. A blank label leaves the previous label.
    Raises ``ValueError`` for an unknown format value.
    """
    updates: dict[str, Any] = {}
    for key, value in changes.items():
        if key in {"id", "type"} or not accepts(current.type, key):
            logger.debug("Ignoring attribute %s for %s field %s", key, current.type.value, current.id)
            continue
        if key == "label":
            label = "" if value is None else str(value)
            if label.strip():
                updates["label"] = label
        elif key == "required":
            if not isinstance(value, bool):
                logger.debug("Ignoring non-boolean required=%r for field %s", value, current.id)
                continue
            updates["required"] = value
        elif key == "format":
            updates["format"] = parse_format(value)
        elif key == "options":
            if isinstance(value, (str, bytes)):
                logger.debug("Ignoring options given as a single string for field %s", current.id)
                continue
            updates["options"] = normalize_options(value or [])
    return replace(current, **updates) if updates else current


def reduce(state: BuilderState, command: Command) -> BuilderState:
    if isinstance(command, AddField):
        kind = parse_field_type(command.field_type)
        existing = state.field_ids()
        field_id = command.field_id
        if not field_id or field_id in existing:
            field_id = generate_field_id(existing)
        label = command.label if command.label and command.label.strip() else None
        return replace(state, fields=state.fields + (make_field(kind, field_id, label),))

    if isinstance(command, UpdateField):
        current = state.find(command.field_id)
        if current is None:
            return state
        return _replace_field(state, apply_changes(current, command.changes))

    if isinstance(command, RemoveField):
        if state.find(command.field_id) is None:
            return state
        return BuilderState(
            fields=tuple(f for f in state.fields if f.id != command.field_id),
            option_drafts=_without_draft(state.option_drafts, command.field_id),
        )

    if isinstance(command, AddOption):
        current = state.find(command.field_id)
        text = (command.text or "").strip()
        if not text or not isinstance(current, DropdownField):
            return state
        updated = replace(current, options=current.options + (text,))
        return BuilderState(
            fields=_replace_field(state, updated).fields,
            option_drafts=_without_draft(state.option_drafts, command.field_id),
        )

    if isinstance(command, RemoveOption):
        current = state.find(command.field_id)
        if not isinstance(current, DropdownField):
            return state
        if not 0 <= command.index < len(current.options):
            return state
        options = current.options[: command.index] + current.options[command.index + 1 :]
        return _replace_field(state, replace(current, options=options))

    if isinstance(command, SetOptionDraft):
        if not isinstance(state.find(command.field_id), DropdownField):
            return state
        drafts = dict(state.option_drafts)
        drafts[command.field_id] = command.text
        return replace(state, option_drafts=drafts)

    raise TypeError(f"unknown builder command: {command!r}")


class SchemaBuilder:
    """Editing session over one schema; every mutation goes through ``reduce``."""

    def __init__(self, fields: Iterable[Field] = ()) -> None:
        fields = tuple(fields)
        ids = [f.id for f in fields]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate field ids: {sorted({i for i in ids if ids.count(i) > 1})}")
        self._state = BuilderState(fields=fields)

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._state.fields

    def dispatch(self, command: Command) -> BuilderState:
        self._state = reduce(self._state, command)
        return self._state

    def get_field(self, field_id: str) -> Field | None:
        return self._state.find(field_id)

    def add_field(
        self,
        field_type: FieldType | str,
        field_id: str | None = None,
        label: str | None = None,
    ) -> Field:
        self.dispatch(AddField(field_type, field_id, label))
        return self._state.fields[-1]

    def update_field(self, field_id: str, **changes: Any) -> None:
        self.dispatch(UpdateField(field_id, changes))

    def remove_field(self, field_id: str) -> None:
        self.dispatch(RemoveField(field_id))

    def add_option(self, field_id: str, raw_text: str) -> None:
        self.dispatch(AddOption(field_id, raw_text))

    def remove_option_at(self, field_id: str, index: int) -> None:
        self.dispatch(RemoveOption(field_id, index))

    def set_option_draft(self, field_id: str, text: str) -> None:
        self.dispatch(SetOptionDraft(field_id, text))

    def option_draft(self, field_id: str) -> str:
        return self._state.option_drafts.get(field_id, "")

    def commit_option_draft(self, field_id: str) -> None:
        self.add_option(field_id, self.option_draft(field_id))

    def serialize(self, title: str) -> dict[str, Any]:
        return serialize(self._state, title)

    @classmethod
    def from_schema(cls, schema: FormSchema) -> "SchemaBuilder":
        """Start a new editing session from a persisted schema's fields."""
        return cls(schema.fields)
