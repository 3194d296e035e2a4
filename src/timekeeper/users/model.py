from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee or the administrator.

    Plain data object; no database access lives here.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    pin: str
    role: Role
    hourly_rate: float
    overtime_rate: float
    created_at: datetime
    birthday: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        """Serializable view without the password hash."""
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "pin": self.pin,
            "birthday": self.birthday,
            "role": self.role.value,
            "hourlyRate": self.hourly_rate,
            "overtimeRate": self.overtime_rate,
            "createdAt": self.created_at.isoformat(),
        }
