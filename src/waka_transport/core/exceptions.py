from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the JSON error handler answers with.
    """

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when no identity is attached to the session or credentials are wrong."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when an identity resolves but lacks the required role.

    Answered with 401 rather than 403 to keep the existing client contract.
    """

    status_code = 401


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on uniqueness violations (sign-up with a taken username/email)."""

    status_code = 409


class InfrastructureError(DomainError):
    """Raised when the store, session store or timer fails."""

    status_code = 500


class NotificationError(InfrastructureError):
    """Raised when the mail transport rejects or fails to deliver a message."""
