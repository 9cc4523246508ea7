"""Tenant directory: subdomain resolution and tenant creation."""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenantauth.core.database import store_errors, violates_unique
from tenantauth.core.errors import DuplicateSubdomainError, PersistenceError
from tenantauth.models.tenant import (
    DEFAULT_MAX_PROJECTS,
    DEFAULT_MAX_USERS,
    DEFAULT_PLAN,
    Tenant,
)


class TenantDirectory:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        name: str,
        subdomain: str,
        plan: str = DEFAULT_PLAN,
        max_users: int = DEFAULT_MAX_USERS,
        max_projects: int = DEFAULT_MAX_PROJECTS,
    ) -> Tenant:
        """Insert a tenant within the caller's transaction.

        The unique index on ``subdomain`` decides conflicts; there is no
        separate existence check.
        """
        tenant = Tenant(
            name=name,
            subdomain=subdomain,
            subscription_plan=plan,
            max_users=max_users,
            max_projects=max_projects,
        )
        with store_errors():
            self._session.add(tenant)
            try:
                await self._session.flush()  # populate tenant.id, hit the constraint
            except IntegrityError as exc:
                if violates_unique(exc, "ix_tenants_subdomain", "tenants.subdomain"):
                    raise DuplicateSubdomainError(
                        f"Subdomain '{subdomain}' is already taken"
                    ) from exc
                raise PersistenceError() from exc
        return tenant

    async def find_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Exact, case-sensitive lookup."""
        stmt = select(Tenant).where(Tenant.subdomain == subdomain)
        with store_errors():
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    async def find_by_id(self, tenant_id: uuid.UUID) -> Tenant | None:
        with store_errors():
            return await self._session.get(Tenant, tenant_id)
