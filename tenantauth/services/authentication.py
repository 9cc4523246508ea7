"""Authentication service: tenant registration, login, and session introspection.

This is the orchestration layer over the tenant directory, identity store,
password hasher and token issuer. It raises ``ServiceError`` subclasses only;
translating them into HTTP responses is the API layer's job.
"""

import logging
import re
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantauth.core.errors import (
    InvalidCredentialsError,
    PersistenceError,
    TenantNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from tenantauth.core.security import CredentialHasher, TokenClaims, TokenIssuer
from tenantauth.models.base import CamelModel
from tenantauth.models.tenant import TenantSummary
from tenantauth.models.user import TenantUserPublic, UserPublic, UserRole
from tenantauth.services.identity_store import IdentityStore
from tenantauth.services.tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)

SUBDOMAIN_PATTERN = re.compile(r"[a-z0-9\-]{1,100}")
DEFAULT_TOKEN_TTL = timedelta(hours=24)


# ── Results ──────────────────────────────────────────────────

class RegisteredTenant(CamelModel):
    tenant_id: uuid.UUID
    subdomain: str
    admin_user: UserPublic


class LoginResult(CamelModel):
    user: TenantUserPublic
    token: str
    expires_in: int


class CurrentUser(CamelModel):
    id: uuid.UUID
    email: str
    full_name: str
    role: str
    is_active: bool
    tenant: TenantSummary | None


# ── Service ──────────────────────────────────────────────────

def _require(**fields: str | None) -> None:
    """Raise ValidationError naming every missing or blank field."""
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class AuthenticationService:
    def __init__(
        self,
        session: AsyncSession,
        hasher: CredentialHasher,
        tokens: TokenIssuer,
        *,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        reject_inactive_users: bool = False,
    ) -> None:
        self._session = session
        self._hasher = hasher
        self._tokens = tokens
        self._token_ttl = token_ttl
        self._reject_inactive_users = reject_inactive_users
        self.tenants = TenantDirectory(session)
        self.users = IdentityStore(session, hasher)

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        """Commit on normal exit, roll back on every other exit path."""
        try:
            yield
        except BaseException:
            await self._session.rollback()
            raise
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError() from exc

    async def register_tenant(
        self,
        tenant_name: str,
        subdomain: str,
        admin_email: str,
        admin_password: str,
        admin_full_name: str,
    ) -> RegisteredTenant:
        """Create a tenant and its first admin user atomically."""
        _require(
            tenantName=tenant_name,
            subdomain=subdomain,
            adminEmail=admin_email,
            adminPassword=admin_password,
            adminFullName=admin_full_name,
        )
        if not SUBDOMAIN_PATTERN.fullmatch(subdomain):
            raise ValidationError(
                "Subdomain may only contain lowercase letters, digits and hyphens"
            )

        async with self._unit_of_work():
            tenant = await self.tenants.create(name=tenant_name, subdomain=subdomain)
            admin = await self.users.create(
                tenant_id=tenant.id,
                email=admin_email,
                plaintext_password=admin_password,
                full_name=admin_full_name,
                role=UserRole.TENANT_ADMIN,
            )

        logger.info("Registered tenant %s (subdomain=%s)", tenant.id, tenant.subdomain)
        return RegisteredTenant(
            tenant_id=tenant.id,
            subdomain=tenant.subdomain,
            admin_user=UserPublic.model_validate(admin),
        )

    async def login(self, email: str, password: str, tenant_subdomain: str) -> LoginResult:
        """Verify credentials inside a tenant and mint a session token."""
        _require(email=email, password=password, tenantSubdomain=tenant_subdomain)

        tenant = await self.tenants.find_by_subdomain(tenant_subdomain)
        if tenant is None:
            logger.info("Login rejected: unknown tenant %s", tenant_subdomain)
            raise TenantNotFoundError()

        user = await self.users.find_by_email_in_tenant(tenant.id, email)
        if user is None:
            # Same cost as a real check so timing does not reveal the account
            self._hasher.dummy_verify()
            logger.info("Login rejected for tenant %s: bad credentials", tenant_subdomain)
            raise InvalidCredentialsError()

        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login rejected for tenant %s: bad credentials", tenant_subdomain)
            raise InvalidCredentialsError()

        if self._reject_inactive_users and not user.is_active:
            logger.info("Login rejected for tenant %s: inactive user", tenant_subdomain)
            raise InvalidCredentialsError()

        token = self._tokens.issue(
            TokenClaims(user_id=user.id, tenant_id=user.tenant_id, role=user.role),
            self._token_ttl,
        )
        return LoginResult(
            user=TenantUserPublic.model_validate(user),
            token=token,
            expires_in=int(self._token_ttl.total_seconds()),
        )

    async def current_user(self, token: str) -> CurrentUser:
        """Resolve a session token to the user and (best effort) their tenant."""
        claims = self._tokens.verify(token)

        user = await self.users.find_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError()

        tenant = await self.tenants.find_by_id(claims.tenant_id)
        return CurrentUser(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            tenant=TenantSummary.model_validate(tenant) if tenant is not None else None,
        )
