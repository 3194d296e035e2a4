from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; empty values mean "not punched"."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    # Browsers emit a trailing "Z" that older fromisoformat rejects.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        # Punches are stored as naive local time.
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_iso_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
