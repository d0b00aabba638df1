from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User, UserProfile


class UserRepository(Protocol):
    """Passenger accounts.

    Note: services depend on this interface; MySQLUserRepository is the production implementation.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, username: str, password_hash: str, role: Role, profile: UserProfile) -> int:
        raise NotImplementedError

    def set_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
