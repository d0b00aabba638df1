from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from .model import SessionRecord


class SessionStore(Protocol):
    """Key/value store for server-side sessions, keyed by an opaque session id.

    Expired records must be reported as absent by ``get``.
    """

    def get(self, session_id: str) -> Optional[SessionRecord]:
        raise NotImplementedError

    def save(self, *, session_id: str, data: dict[str, Any], expires_at: datetime) -> None:
        raise NotImplementedError

    def destroy(self, session_id: str) -> None:
        raise NotImplementedError
