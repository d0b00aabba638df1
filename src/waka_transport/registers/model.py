from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..users.model import UserProfile


@dataclass(frozen=True)
class RegisterForm:
    """A registration application waiting for staff review."""

    register_id: int
    username: str
    password_hash: str
    profile: UserProfile = field(default_factory=UserProfile)
    created_at: Optional[datetime] = None

    @property
    def email(self) -> Optional[str]:
        return self.profile.email

    @property
    def first_name(self) -> Optional[str]:
        return self.profile.first_name

    @property
    def last_name(self) -> Optional[str]:
        return self.profile.last_name

    def to_json(self) -> dict:
        return {
            "id": self.register_id,
            "username": self.username,
            **self.profile.to_json(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
