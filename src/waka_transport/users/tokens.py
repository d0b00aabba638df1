from __future__ import annotations

from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.exceptions import AuthenticationError

ACTIVATION_SALT = "account-activation"
RESET_SALT = "password-reset"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str


class AccountTokens:
    """Signed, expiring e-mail tokens for account activation and password reset.

    A token is bound to one account: it carries both the user id and the
    e-mail address it was mailed to.
    """

    def __init__(self, secret_key: str, *, activation_max_age: int, reset_max_age: int):
        self._serializer = URLSafeTimedSerializer(secret_key)
        self._max_age = {ACTIVATION_SALT: activation_max_age, RESET_SALT: reset_max_age}

    def issue(self, *, user_id: int, email: str, purpose: str) -> str:
        return self._serializer.dumps({"user_id": int(user_id), "email": email}, salt=purpose)

    def verify(self, token: str, *, purpose: str) -> TokenClaims:
        try:
            payload = self._serializer.loads(token, salt=purpose, max_age=self._max_age[purpose])
        except SignatureExpired:
            raise AuthenticationError("Token has expired")
        except BadSignature:
            raise AuthenticationError("Invalid token")
        try:
            return TokenClaims(user_id=int(payload["user_id"]), email=str(payload["email"]))
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")

    def verify_any(self, token: str) -> TokenClaims:
        """Activation links and reset links both lead to the change-password page."""
        try:
            return self.verify(token, purpose=RESET_SALT)
        except AuthenticationError:
            return self.verify(token, purpose=ACTIVATION_SALT)
