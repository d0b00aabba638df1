from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_str, parse_id
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..notifications import templates
from ..notifications.mailer import DeliveryReceipt, Mailer
from .model import User, UserProfile
from .repository import UserRepository
from .tokens import ACTIVATION_SALT, RESET_SALT, AccountTokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignUpResult:
    user: User
    activation_token: str


class UserService:
    """Passenger accounts: sign-up, login and password recovery."""

    def __init__(self, users: UserRepository, mailer: Mailer, tokens: AccountTokens, *, frontend_url: str):
        self._users = users
        self._mailer = mailer
        self._tokens = tokens
        self._frontend_url = frontend_url.rstrip("/")

    def get(self, user_id: Any) -> User:
        user = self._users.get_by_id(parse_id(user_id, "user"))
        if not user:
            raise NotFoundError("User not found")
        return user

    def sign_up(self, data: Mapping[str, Any]) -> SignUpResult:
        username = optional_str(data.get("username"))
        password = data.get("password")
        if not username or not password:
            raise ValidationError("Parameters missing")
        if self._users.get_by_username(username):
            raise ConflictError("Username already taken. Please choose a different username or log in instead")

        profile = UserProfile.from_json(data)
        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(str(password)),
            role=Role.USER,
            profile=profile,
        )
        user = User(user_id=user_id, username=username, password_hash="", role=Role.USER, profile=profile)
        logger.info("User %s signed up as %s", user_id, username)

        token = self._tokens.issue(user_id=user_id, email=profile.email or "", purpose=ACTIVATION_SALT)
        if profile.email:
            self._mailer.send(
                templates.account_approved(
                    sender=self._mailer.sender,
                    to=profile.email,
                    first_name=profile.first_name or "",
                    last_name=profile.last_name or "",
                    link=f"{self._frontend_url}/resetpassword/{user_id}/{token}",
                )
            )
        return SignUpResult(user=user, activation_token=token)

    def login(self, *, username: str, password: str) -> User:
        username = optional_str(username)
        if not username or not password:
            raise ValidationError("Parameters missing")

        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Username is incorrect")
        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # unknown hash method in the stored value
            ok = False
        if not ok:
            raise AuthenticationError("Password is incorrect")
        return user

    def forgot_password(self, *, email: str) -> DeliveryReceipt:
        """Mail a reset link to the account holder.

        The token only ever travels by e-mail; callers get the delivery receipt.
        """
        email = optional_str(email)
        if not email:
            raise ValidationError("Parameters missing")
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        token = self._tokens.issue(user_id=user.user_id, email=email, purpose=RESET_SALT)
        receipt = self._mailer.send(
            templates.password_reset(
                sender=self._mailer.sender,
                to=email,
                first_name=user.profile.first_name or "",
                last_name=user.profile.last_name or "",
                link=f"{self._frontend_url}/forgotpasswordpage/{user.user_id}/{token}",
            )
        )
        logger.info("Password reset link sent to user %s", user.user_id)
        return receipt

    def change_password(self, *, user_id: Any, token: str, password: str) -> User:
        try:
            uid = parse_id(user_id, "user")
        except ValidationError:
            raise ValidationError("Invalid user Id")
        user = self._users.get_by_id(uid)
        if not user:
            raise NotFoundError("User not found")
        if not password:
            raise ValidationError("Parameters missing")

        claims = self._tokens.verify_any(token)
        if claims.user_id != uid or not claims.email or claims.email != user.email:
            raise AuthenticationError("Invalid token")

        self._users.set_password_hash(uid, password_hash=generate_password_hash(str(password)))
        logger.info("Password changed for user %s", uid)
        return user
