from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_non_negative, require_pin
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (PIN kiosk login or email/password)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login_pin(self, pin: str) -> User:
        user = self._users.get_by_pin((pin or "").strip())
        if not user:
            logger.info("pin login rejected")
            raise AuthenticationError("Invalid PIN")
        return user

    def login_email(self, email: str, password: str) -> User:
        user = self._users.get_by_email((email or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("email login rejected email=%s", email)
            raise AuthenticationError("Invalid credentials")
        return user


class UserService:
    """Use case: manage employee profiles (admin) and self-service edits."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def save_user(
        self,
        *,
        user_id: Optional[str] = None,
        name: str,
        email: str,
        password: Optional[str],
        pin: str,
        hourly_rate,
        overtime_rate,
        role: Role = Role.USER,
        birthday: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> User:
        """Create a user, or update it when ``user_id`` already exists.

        A blank password on update keeps the stored hash.
        """

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        pin = require_pin(pin)
        hourly_rate = require_non_negative(hourly_rate, "Hourly rate")
        overtime_rate = require_non_negative(overtime_rate, "Overtime rate")

        existing = self._users.get_by_id(user_id) if user_id else None

        holder = self._users.get_by_pin(pin)
        if holder and (existing is None or holder.user_id != existing.user_id):
            raise ValidationError("PIN is already used by another employee")

        if existing:
            if existing.is_admin and role != Role.ADMIN:
                raise ValidationError("The admin account cannot be demoted")
            password_hash = existing.password_hash
            if password:
                password_hash = generate_password_hash(require_min_length(password, "Password", MIN_PASSWORD_LENGTH))
            user = replace(
                existing,
                name=name,
                email=email,
                password_hash=password_hash,
                pin=pin,
                role=role,
                hourly_rate=hourly_rate,
                overtime_rate=overtime_rate,
                birthday=birthday or None,
            )
        else:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            user = User(
                user_id=user_id or uuid.uuid4().hex,
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                pin=pin,
                role=role,
                hourly_rate=hourly_rate,
                overtime_rate=overtime_rate,
                created_at=now or datetime.now(),
                birthday=birthday or None,
            )

        self._users.upsert(user)
        logger.info("user saved id=%s created=%s", user.user_id, existing is None)
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        if user.is_admin:
            raise ValidationError("Cannot delete the admin account")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete employee")
        logger.info("user deleted id=%s", user_id)
