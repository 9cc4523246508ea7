"""Identity store: tenant-scoped user records."""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenantauth.core.database import store_errors, violates_unique
from tenantauth.core.errors import DuplicateEmailInTenantError, PersistenceError
from tenantauth.core.security import CredentialHasher
from tenantauth.models.user import User, UserRole


class IdentityStore:
    def __init__(self, session: AsyncSession, hasher: CredentialHasher) -> None:
        self._session = session
        self._hasher = hasher

    async def create(
        self,
        tenant_id: uuid.UUID,
        email: str,
        plaintext_password: str,
        full_name: str,
        role: UserRole | str = UserRole.USER,
    ) -> User:
        """Hash the password and insert the user within the caller's transaction."""
        user = User(
            tenant_id=tenant_id,
            email=email,
            password_hash=self._hasher.hash(plaintext_password),
            full_name=full_name,
            role=str(role),
        )
        with store_errors():
            self._session.add(user)
            try:
                await self._session.flush()
            except IntegrityError as exc:
                if violates_unique(
                    exc, "uq_users_tenant_email", "users.tenant_id", "users.email"
                ):
                    raise DuplicateEmailInTenantError() from exc
                raise PersistenceError() from exc
        return user

    async def find_by_email_in_tenant(self, tenant_id: uuid.UUID, email: str) -> User | None:
        stmt = select(User).where(
            User.tenant_id == tenant_id,
            User.email == email,
        )
        with store_errors():
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        with store_errors():
            return await self._session.get(User, user_id)
