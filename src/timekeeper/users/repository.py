from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_pin(self, pin: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def upsert(self, user: User) -> None:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
