from __future__ import annotations

import math
from typing import Any, Optional

from ..core.constants import PIN_LENGTH
from ..core.exceptions import ValidationError


def require_json_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return data


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    value = optional_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    value = optional_text(value, field_name)
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_pin(value: Optional[str]) -> str:
    pin = (optional_text(value, "PIN") or "").strip()
    if len(pin) != PIN_LENGTH or not pin.isdigit():
        raise ValidationError(f"PIN must be exactly {PIN_LENGTH} digits")
    return pin


def require_non_negative(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number
