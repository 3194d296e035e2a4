from __future__ import annotations

from datetime import datetime
from typing import Optional

_SECONDS_PER_HOUR = 3600.0


def hours_between(start: Optional[datetime], end: Optional[datetime]) -> float:
    """Elapsed fractional hours from ``start`` to ``end``.

    Missing punches and reversed or equal instants count as no hours (0.0);
    they are never treated as errors.
    """

    if start is None or end is None:
        return 0.0
    if end <= start:
        return 0.0
    return (end - start).total_seconds() / _SECONDS_PER_HOUR
