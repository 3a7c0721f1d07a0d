"""Checks applied to values before they are admitted into the store."""

from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar

from .errors import ValidationError

E = TypeVar("E")


def require_date(field: str, value: Any) -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string; reject empty values."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError(field, "is required")
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(field, f"not a valid date: {value!r}")


def require_text(field: str, value: Optional[str]) -> str:
    """Return the trimmed text, rejecting None or whitespace-only strings."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(field, "is required")
    return text


def require_choice(field: str, value: Any, enum_cls: Type[E]) -> E:
    """Convert value to a member of enum_cls, or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    if value is None or not str(value).strip():
        raise ValidationError(field, "is required")
    parse = getattr(enum_cls, "parse", None)
    try:
        return parse(value) if parse else enum_cls(value)
    except (KeyError, ValueError):
        choices = ", ".join(m.value for m in enum_cls)
        raise ValidationError(field, f"must be one of {choices}, got {value!r}")


def require_non_negative(field: str, value: Any, kind: type = int):
    """Reject None, non-numeric and negative numbers."""
    if value is None or isinstance(value, bool):
        raise ValidationError(field, "is required")
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"not a number: {value!r}")
    if number < 0:
        raise ValidationError(field, "must not be negative")
    return number
