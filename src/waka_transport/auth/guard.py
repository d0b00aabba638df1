from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..staffs.repository import StaffRepository

logger = logging.getLogger(__name__)

STAFF_NOT_AUTHENTICATED = "Staff not authenticated"
USER_NOT_AUTHENTICATED = "User not authenticated"


@dataclass(frozen=True)
class SessionSnapshot:
    """Identity references read from the session at the start of a request."""

    user_id: Optional[Any] = None
    staff_id: Optional[Any] = None


@dataclass(frozen=True)
class AuthenticatedStaff:
    staff_id: int
    email: str


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: Any


class AuthGuard:
    """Resolve a session snapshot into a role-qualified identity.

    The staff check hits the store and verifies the role; the user check only
    looks at the presence of ``user_id``.
    """

    def __init__(self, staffs: StaffRepository):
        self._staffs = staffs

    @staticmethod
    def _coerce_id(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value if value > 0 else None
        text = str(value).strip()
        if not text.isdigit() or int(text) <= 0:
            return None
        return int(text)

    def require_staff(self, snapshot: SessionSnapshot) -> AuthenticatedStaff:
        if snapshot.staff_id is None:
            raise AuthenticationError(STAFF_NOT_AUTHENTICATED)

        staff_id = self._coerce_id(snapshot.staff_id)
        if staff_id is None:
            raise AuthenticationError(STAFF_NOT_AUTHENTICATED)

        staff = self._staffs.get_by_id(staff_id)
        if not staff:
            raise AuthenticationError(STAFF_NOT_AUTHENTICATED)
        if staff.role != Role.STAFF:
            raise AuthorizationError(STAFF_NOT_AUTHENTICATED)

        logger.info("Authenticated staff %s (%s)", staff.staff_id, staff.email)
        return AuthenticatedStaff(staff_id=staff.staff_id, email=staff.email)

    def require_user(self, snapshot: SessionSnapshot) -> AuthenticatedUser:
        if not snapshot.user_id:
            raise AuthenticationError(USER_NOT_AUTHENTICATED)
        return AuthenticatedUser(user_id=snapshot.user_id)
