from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Staff:
    staff_id: int
    email: str
    role: Role = Role.STAFF
    created_at: Optional[datetime] = None

    def to_json(self) -> dict:
        return {"id": self.staff_id, "email": self.email, "role": self.role.value}
