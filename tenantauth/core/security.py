"""Security utilities: password hashing and session tokens."""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from tenantauth.core.config import Settings
from tenantauth.core.errors import HashFormatError, TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ── Password hashing (Argon2) ────────────────────────────────

class CredentialHasher:
    """Salted one-way password hashing with a tunable work factor."""

    def __init__(self, rounds: int = 2, memory_cost: int = 102400) -> None:
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__rounds=rounds,
            argon2__memory_cost=memory_cost,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialHasher":
        return cls(
            rounds=settings.password_hash_rounds,
            memory_cost=settings.password_hash_memory_cost,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check ``plaintext`` against ``digest``. Raises HashFormatError on a bad digest."""
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError) as exc:
            raise HashFormatError("Stored password digest is malformed") from exc

    def dummy_verify(self) -> None:
        """Spend the cost of one verification without a real digest."""
        self._context.dummy_verify()


# ── Session tokens (JWT) ─────────────────────────────────────

@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    tenant_id: uuid.UUID
    role: str


class TokenIssuer:
    """Mints and verifies signed, time-bounded session tokens.

    Expiry is checked against the injected ``clock`` rather than the wall
    clock so that token lifetimes can be exercised deterministically.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("JWT signing secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "TokenIssuer":
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, clock)

    def issue(self, claims: TokenClaims, ttl: timedelta) -> str:
        issued_at = self._clock()
        payload = {
            "sub": str(claims.user_id),
            "tid": str(claims.tenant_id),
            "role": claims.role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token``. Raises TokenInvalidError or TokenExpiredError."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.info("Rejected token: %s", type(exc).__name__)
            raise TokenInvalidError() from exc

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise TokenInvalidError("Token has no expiry")
        if self._clock().timestamp() >= expires_at:
            raise TokenExpiredError()

        try:
            return TokenClaims(
                user_id=uuid.UUID(payload["sub"]),
                tenant_id=uuid.UUID(payload["tid"]),
                role=str(payload["role"]),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            raise TokenInvalidError("Malformed token claims") from exc
