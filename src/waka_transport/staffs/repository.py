from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Staff


class StaffRepository(Protocol):
    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Staff]:
        raise NotImplementedError

    def create_staff(self, *, email: str, role: Role) -> int:
        raise NotImplementedError
