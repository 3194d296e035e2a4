from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollExtras


class PayrollExtrasRepository(Protocol):
    def get_by_user(self, user_id: str) -> Optional[PayrollExtras]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollExtras]:
        raise NotImplementedError

    def upsert(self, extras: PayrollExtras) -> None:
        raise NotImplementedError
