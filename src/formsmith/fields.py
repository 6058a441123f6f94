from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Union

from formsmith.field_types import (
    FieldFormat,
    FieldType,
    default_label,
    parse_field_type,
    parse_format,
)


@dataclass(frozen=True)
class BaseField:
    id: str
    label: str
    required: bool = False

    type: ClassVar[FieldType]


@dataclass(frozen=True)
class TextField(BaseField):
    format: FieldFormat | None = None

    type: ClassVar[FieldType] = FieldType.TEXT


@dataclass(frozen=True)
class TextareaField(BaseField):
    format: FieldFormat | None = None

    type: ClassVar[FieldType] = FieldType.TEXTAREA


@dataclass(frozen=True)
class DateField(BaseField):
    type: ClassVar[FieldType] = FieldType.DATE


@dataclass(frozen=True)
class DropdownField(BaseField):
    options: tuple[str, ...] = ()

    type: ClassVar[FieldType] = FieldType.DROPDOWN


Field = Union[TextField, TextareaField, DateField, DropdownField]

FIELD_CLASSES: dict[FieldType, type] = {
    FieldType.TEXT: TextField,
    FieldType.TEXTAREA: TextareaField,
    FieldType.DATE: DateField,
    FieldType.DROPDOWN: DropdownField,
}


def normalize_options(values: Iterable[Any]) -> tuple[str, ...]:
    return tuple(
        text for text in (str(value).strip() for value in values if value is not None) if text
    )


def make_field(field_type: FieldType | str, field_id: str, label: str | None = None) -> Field:
    kind = parse_field_type(field_type)
    return FIELD_CLASSES[kind](id=field_id, label=label or default_label(kind))


def field_to_dict(field: Field) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": field.id,
        "label": field.label,
        "type": field.type.value,
        "required": field.required,
    }
    fmt = getattr(field, "format", None)
    if fmt is not None:
        data["format"] = fmt.value
    if isinstance(field, DropdownField):
        data["options"] = list(field.options)
    return data


def field_from_dict(raw: dict[str, Any]) -> Field:
    """Build a field from a document entry, dropping attributes its type does not accept."""
    kind = parse_field_type(raw["type"])
    kwargs: dict[str, Any] = {
        "id": str(raw["id"]),
        "label": str(raw.get("label", "")),
        "required": bool(raw.get("required", False)),
    }
    if kind in {FieldType.TEXT, FieldType.TEXTAREA}:
        kwargs["format"] = parse_format(raw.get("format"))
    elif kind == FieldType.DROPDOWN:
        kwargs["options"] = normalize_options(raw.get("options") or [])
    return FIELD_CLASSES[kind](**kwargs)
