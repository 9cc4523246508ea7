"""Error taxonomy for the authentication core.

Every failure the core can report derives from ``ServiceError`` and carries a
stable ``kind`` string, the HTTP status the API boundary should answer with,
and a human-readable default message. The boundary renders these verbatim,
so messages must never contain internal details.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for all errors surfaced by the core."""

    kind: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ── Caller input ─────────────────────────────────────────────

class ValidationError(ServiceError):
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


# ── Uniqueness conflicts ─────────────────────────────────────

class DuplicateSubdomainError(ServiceError):
    kind = "duplicate_subdomain"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Subdomain is already taken"


class DuplicateEmailInTenantError(ServiceError):
    kind = "duplicate_email"
    status_code = status.HTTP_409_CONFLICT
    default_message = "A user with this email already exists in this tenant"


# ── Lookups / authentication ─────────────────────────────────

class TenantNotFoundError(ServiceError):
    kind = "tenant_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Tenant not found"


class UserNotFoundError(ServiceError):
    kind = "user_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InvalidCredentialsError(ServiceError):
    """Wrong email or wrong password; the two cases are indistinguishable."""

    kind = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class TokenExpiredError(ServiceError):
    kind = "token_expired"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token has expired"


class TokenInvalidError(ServiceError):
    kind = "token_invalid"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


# ── Internal failures (rendered generically) ─────────────────

class PersistenceError(ServiceError):
    kind = "persistence_error"


class HashFormatError(ServiceError):
    """A stored password digest could not be parsed."""
