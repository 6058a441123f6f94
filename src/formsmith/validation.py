"""Answer validation against a persisted schema.

Validation is fail-fast: ``validate`` reports only the first failing field in
schema order, matching the single-message feedback a respondent sees.
``iter_failures`` exposes every failure for callers that want them all.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping

from formsmith.field_types import FieldFormat
from formsmith.fields import Field
from formsmith.schema import FormSchema

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class FailureKind(str, Enum):
    REQUIRED = "required"
    INVALID_FORMAT = "invalid_format"


@dataclass(frozen=True)
class ValidationFailure:
    kind: FailureKind
    field: Field
    expected: FieldFormat | None = None

    @property
    def message(self) -> str:
        if self.kind == FailureKind.REQUIRED:
            return f'"{self.field.label}" is required'
        if self.expected == FieldFormat.EMAIL:
            return "Invalid email address"
        return f'"{self.field.label}" must be a number'


@dataclass(frozen=True)
class ValidationResult:
    answers: Mapping[str, str]
    failure: ValidationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def is_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def is_number(value: str) -> bool:
    # float() accepts digit separators ("1_000"); a typed answer should not.
    if "_" in value:
        return False
    try:
        number = float(value)
    except ValueError:
        return False
    return math.isfinite(number)


def check_field(field: Field, raw: str | None) -> ValidationFailure | None:
    value = (raw or "").strip()
    if field.required and not value:
        return ValidationFailure(FailureKind.REQUIRED, field)
    if not value:
        return None
    fmt = getattr(field, "format", None)
    if fmt == FieldFormat.EMAIL and not is_email(value):
        return ValidationFailure(FailureKind.INVALID_FORMAT, field, FieldFormat.EMAIL)
    if fmt == FieldFormat.NUMBER and not is_number(value):
        return ValidationFailure(FailureKind.INVALID_FORMAT, field, FieldFormat.NUMBER)
    return None


def iter_failures(schema: FormSchema, answers: Mapping[str, str]) -> Iterator[ValidationFailure]:
    for field in schema.fields:
        failure = check_field(field, answers.get(field.id))
        if failure is not None:
            yield failure


def validate(schema: FormSchema, answers: Mapping[str, str]) -> ValidationResult:
    """Accept ``answers`` unchanged, or report the first failing field."""
    failure = next(iter_failures(schema, answers), None)
    return ValidationResult(answers=answers, failure=failure)
