from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..users.model import UserProfile
from .model import RegisterForm


class RegisterRepository(Protocol):
    def get_by_id(self, register_id: int) -> Optional[RegisterForm]:
        raise NotImplementedError

    def list_all(self) -> Sequence[RegisterForm]:
        raise NotImplementedError

    def create(self, *, username: str, password_hash: str, profile: UserProfile) -> int:
        raise NotImplementedError

    def delete_by_id(self, register_id: int) -> bool:
        raise NotImplementedError
