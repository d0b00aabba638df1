from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import optional_str, parse_id, require_fields
from ..core.exceptions import NotFoundError
from ..notifications import templates
from ..notifications.mailer import Mailer
from ..users.model import UserProfile
from .model import RegisterForm
from .repository import RegisterRepository

logger = logging.getLogger(__name__)

MISSING_MESSAGE = "Register form must include all required information"

# altPhoneNumber and disabilityDetails are optional
_REQUIRED = (
    "username",
    "password",
    "firstName",
    "lastName",
    "dob",
    "email",
    "address",
    "town",
    "postcode",
    "phoneNumber",
    "gender",
    "ethnicity",
    "disability",
    "assistance",
    "emergencyName",
    "emergencyPhone",
    "emergencyRelationship",
)


class RegisterService:
    def __init__(self, registers: RegisterRepository, mailer: Mailer):
        self._registers = registers
        self._mailer = mailer

    def list_all(self) -> Sequence[RegisterForm]:
        return self._registers.list_all()

    def get(self, register_id: Any) -> RegisterForm:
        rid = parse_id(register_id, "register")
        form = self._registers.get_by_id(rid)
        if not form:
            raise NotFoundError("Register form not found")
        return form

    def submit(self, data: Mapping[str, Any]) -> RegisterForm:
        require_fields(data, _REQUIRED, MISSING_MESSAGE)
        username = optional_str(data.get("username")) or ""
        password_hash = generate_password_hash(str(data["password"]))
        profile = UserProfile.from_json(data)

        register_id = self._registers.create(username=username, password_hash=password_hash, profile=profile)
        logger.info("Registration form %s submitted by %s", register_id, username)
        return RegisterForm(register_id=register_id, username=username, password_hash=password_hash, profile=profile)

    def delete(self, register_id: Any, *, notify: bool = False) -> None:
        """Remove an application; with ``notify`` the applicant gets the denial e-mail first."""
        form = self.get(register_id)
        if notify:
            self._mailer.send(templates.registration_denied(sender=self._mailer.sender, register=form))
        self._registers.delete_by_id(form.register_id)
