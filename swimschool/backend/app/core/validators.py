"""Precondition checks shared by every mutating service call."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable

from .constants import LESSON_PREFERENCES, LESSON_TYPES, SWIM_STYLES
from .errors import ValidationError
from .timeutils import TIME_PATTERN

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def validate_date(value: str) -> date:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value.strip()):
        raise ValidationError(f"Date must be in YYYY-MM-DD format, got {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid calendar date: {value}") from exc


def validate_time(value: str) -> None:
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise ValidationError(f"Time must be in HH:MM format, got {value!r}")


def validate_time_range(start_time: str, end_time: str) -> None:
    validate_time(start_time)
    validate_time(end_time)
    # zero-padded HH:MM strings sort chronologically
    if start_time >= end_time:
        raise ValidationError("Start time must be before end time")


def validate_swim_style(style: str) -> str:
    normalized = style.strip() if isinstance(style, str) else style
    if normalized not in SWIM_STYLES:
        raise ValidationError(f"Invalid swimming style: {style}")
    return normalized


def validate_swim_styles(styles: Iterable[str] | None, *, allow_empty: bool = False) -> list[str]:
    if styles is None or isinstance(styles, str):
        raise ValidationError("Swimming styles must be a list")
    result: list[str] = []
    for style in styles:
        normalized = validate_swim_style(style)
        if normalized not in result:
            result.append(normalized)
    if not result and not allow_empty:
        raise ValidationError("Swimming styles must be a non-empty list")
    return result


def validate_lesson_type(value: str) -> str:
    if value not in LESSON_TYPES:
        raise ValidationError('Lesson type must be either "private" or "group"')
    return value


def validate_lesson_preference(value: str) -> str:
    if value not in LESSON_PREFERENCES:
        raise ValidationError("Invalid preferred lesson type")
    return value


def validate_identifier(value: int | str, name: str = "ID") -> int:
    """Return the surrogate key as an int; accepts positive ints or digit strings."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name} format")
    if isinstance(value, int):
        identifier = value
    elif isinstance(value, str) and value.isascii() and value.isdigit():
        identifier = int(value)
    else:
        raise ValidationError(f"Invalid {name} format")
    if identifier < 1:
        raise ValidationError(f"Invalid {name} format")
    return identifier


def validate_positive(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{name} must be at least 1")
    return value


def validate_non_negative(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{name} must not be negative")
    return value


__all__ = [
    "validate_date",
    "validate_time",
    "validate_time_range",
    "validate_swim_style",
    "validate_swim_styles",
    "validate_lesson_type",
    "validate_lesson_preference",
    "validate_identifier",
    "validate_positive",
    "validate_non_negative",
]
