from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeLog


class TimeLogRepository(Protocol):
    def list_all(self) -> Sequence[TimeLog]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[TimeLog]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[TimeLog]:
        raise NotImplementedError

    def upsert(self, log: TimeLog) -> None:
        """Insert or replace the record keyed by ``log_id``."""

        raise NotImplementedError

    def delete_by_id(self, log_id: str) -> bool:
        raise NotImplementedError
