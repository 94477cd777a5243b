from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import TypeVar

from ..core.constants import MAX_YEAR, MIN_YEAR
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)


def require_date(value, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}")


def require_enum(enum_cls: type[E], value, field_name: str) -> E:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} {value!r}. Must be one of: {allowed}")


def require_month(value) -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month: {value!r}")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {value!r}")
    return month


def require_year(value) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid year: {value!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Invalid year: {value!r}")
    return year
