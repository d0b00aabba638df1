from __future__ import annotations

import logging

from ..common.validators import optional_str
from ..core.constants import STAFF_EMAIL_DOMAIN
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import Staff
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class StaffService:
    """Staff sign-up and login.

    Note: staff log in by e-mail address alone; there is no secret to verify.
    """

    def __init__(self, staffs: StaffRepository, *, email_domain: str = STAFF_EMAIL_DOMAIN):
        self._staffs = staffs
        self._email_domain = email_domain

    def sign_up(self, *, email: str) -> Staff:
        email = optional_str(email)
        if not email:
            raise ValidationError("Parameters missing")
        if not email.lower().endswith(self._email_domain.lower()):
            raise ConflictError("Staff email must be registered with Waka Eastern Bay email address")
        if self._staffs.get_by_email(email):
            raise ConflictError("A staff with this email address already exists. Please log in instead")

        staff_id = self._staffs.create_staff(email=email, role=Role.STAFF)
        logger.info("Staff %s signed up", staff_id)
        return Staff(staff_id=staff_id, email=email, role=Role.STAFF)

    def login(self, *, email: str) -> Staff:
        email = optional_str(email)
        if not email:
            raise ValidationError("Parameters missing")
        staff = self._staffs.get_by_email(email)
        if not staff:
            raise AuthenticationError("Email address is incorrect")
        return staff

    def get(self, staff_id: int) -> Staff:
        staff = self._staffs.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Staff not found")
        return staff
