from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SessionRecord:
    """Server-side session row.

    ``data`` normally holds at most one of ``user_id`` / ``staff_id``.
    """

    session_id: str
    expires_at: datetime
    data: dict[str, Any] = field(default_factory=dict)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
