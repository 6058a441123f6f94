from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    DATE = "date"
    DROPDOWN = "dropdown"


class FieldFormat(str, Enum):
    EMAIL = "email"
    NUMBER = "number"


COMMON_ATTRIBUTES = ("id", "label", "type", "required")

# Optional attributes each kind accepts on top of COMMON_ATTRIBUTES.
APPLICABLE_ATTRIBUTES: dict[FieldType, frozenset[str]] = {
    FieldType.TEXT: frozenset({"format"}),
    FieldType.TEXTAREA: frozenset({"format"}),
    FieldType.DATE: frozenset(),
    FieldType.DROPDOWN: frozenset({"options"}),
}


def parse_field_type(value: object) -> FieldType:
    if isinstance(value, FieldType):
        return value
    return FieldType(str(value).strip())


def parse_format(value: object) -> FieldFormat | None:
    if value is None or value == "":
        return None
    if isinstance(value, FieldFormat):
        return value
    return FieldFormat(str(value).strip())


def accepts(field_type: FieldType, attribute: str) -> bool:
    return attribute in COMMON_ATTRIBUTES or attribute in APPLICABLE_ATTRIBUTES[field_type]


def default_label(field_type: FieldType) -> str:
    return f"{field_type.value} field"
