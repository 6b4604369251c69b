from __future__ import annotations

import math
from datetime import timedelta
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import INSTANT_FORMAT, parse_iso_date, parse_iso_instant

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field_name, "is required")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    """Coerce `value` into `enum_cls`, accepting either a member or its label."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(field_name, f"{value!r} is not one of: {allowed}") from None


def require_iso_date(value: Optional[str], field_name: str) -> str:
    require_non_empty(value, field_name)
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        parsed = None
    # Zero-padded form only, so that dates sort correctly as text.
    if parsed is None or parsed.isoformat() != value:
        raise ValidationError(field_name, f"{value!r} is not a YYYY-MM-DD date")
    return value


def require_iso_instant(value: Optional[str], field_name: str) -> str:
    require_non_empty(value, field_name)
    try:
        parsed = parse_iso_instant(value)
    except ValueError:
        parsed = None
    # Canonical UTC form only, so that instants sort correctly as text.
    if parsed is None or parsed.utcoffset() != timedelta(0) or parsed.strftime(INSTANT_FORMAT) != value:
        raise ValidationError(field_name, f"{value!r} is not a UTC timestamp like 2024-01-10T09:00:00Z")
    return value


def require_number(value: Any, field_name: str, *, minimum: Optional[float] = None) -> float:
    # bool is an int subclass; a True/False here is always a caller mistake.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field_name, "must be a number")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(field_name, "must be finite")
    if minimum is not None and number < minimum:
        raise ValidationError(field_name, f"must be >= {minimum:g}")
    return number


def optional_number(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    return require_number(value, field_name)


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(field_name, "must be True or False")
    return value


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(field_name, "must be text")
    return value


def require_unsaved(record_id: Optional[int], field_name: str) -> None:
    if record_id is not None:
        raise ValidationError(field_name, "is assigned by the store and must be empty on insert")
