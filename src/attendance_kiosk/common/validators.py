from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_amount(value, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount


def require_choice(value, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    raw = str(value).strip()
    for candidate in (raw.upper(), raw.lower(), raw):
        try:
            return enum_cls(candidate)
        except ValueError:
            continue
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"{field_name} must be one of: {allowed}")
