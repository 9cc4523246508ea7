"""Tenant directory and identity store against a real (SQLite) session."""

import uuid

import pytest
from sqlalchemy import text

from tenantauth.core.errors import (
    DuplicateEmailInTenantError,
    DuplicateSubdomainError,
    PersistenceError,
)
from tenantauth.models.user import UserRole
from tenantauth.services.identity_store import IdentityStore
from tenantauth.services.tenant_directory import TenantDirectory


@pytest.mark.asyncio
async def test_create_tenant_applies_plan_defaults(session):
    directory = TenantDirectory(session)
    tenant = await directory.create(name="Acme", subdomain="acme")
    await session.commit()

    assert isinstance(tenant.id, uuid.UUID)
    assert tenant.subscription_plan == "free"
    assert tenant.max_users == 5
    assert tenant.max_projects == 3


@pytest.mark.asyncio
async def test_find_tenant_by_subdomain_and_id(session):
    directory = TenantDirectory(session)
    tenant = await directory.create(name="Acme", subdomain="acme")
    await session.commit()

    assert (await directory.find_by_subdomain("acme")).id == tenant.id
    assert (await directory.find_by_id(tenant.id)).subdomain == "acme"
    assert await directory.find_by_subdomain("nope") is None
    assert await directory.find_by_id(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_subdomain_lookup_is_case_sensitive(session):
    directory = TenantDirectory(session)
    await directory.create(name="Acme", subdomain="acme")
    await session.commit()

    assert await directory.find_by_subdomain("ACME") is None


@pytest.mark.asyncio
async def test_duplicate_subdomain_raises(session):
    directory = TenantDirectory(session)
    await directory.create(name="First", subdomain="taken")
    await session.commit()

    with pytest.raises(DuplicateSubdomainError):
        await directory.create(name="Second", subdomain="taken")
    await session.rollback()


@pytest.mark.asyncio
async def test_create_user_hashes_password(session, hasher):
    tenant = await TenantDirectory(session).create(name="Acme", subdomain="acme")
    store = IdentityStore(session, hasher)
    user = await store.create(
        tenant_id=tenant.id,
        email="admin@acme.io",
        plaintext_password="Secr3t!Pass",
        full_name="Ada Admin",
        role=UserRole.TENANT_ADMIN,
    )
    await session.commit()

    assert user.password_hash != "Secr3t!Pass"
    assert hasher.verify("Secr3t!Pass", user.password_hash)
    assert user.role == "tenant_admin"
    assert user.is_active is True


@pytest.mark.asyncio
async def test_email_unique_per_tenant_only(session, hasher):
    directory = TenantDirectory(session)
    store = IdentityStore(session, hasher)
    first = await directory.create(name="One", subdomain="one")
    second = await directory.create(name="Two", subdomain="two")
    await store.create(first.id, "same@example.com", "password123", "One")
    await store.create(second.id, "same@example.com", "password123", "Two")
    await session.commit()

    with pytest.raises(DuplicateEmailInTenantError):
        await store.create(first.id, "same@example.com", "password123", "Again")
    await session.rollback()


@pytest.mark.asyncio
async def test_find_user_is_scoped_to_tenant(session, hasher):
    directory = TenantDirectory(session)
    store = IdentityStore(session, hasher)
    home = await directory.create(name="Home", subdomain="home")
    away = await directory.create(name="Away", subdomain="away")
    user = await store.create(home.id, "ada@example.com", "password123", "Ada")
    await session.commit()

    assert (await store.find_by_email_in_tenant(home.id, "ada@example.com")).id == user.id
    assert await store.find_by_email_in_tenant(away.id, "ada@example.com") is None
    assert (await store.find_by_id(user.id)).email == "ada@example.com"
    assert await store.find_by_id(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_timestamps_are_timezone_aware(session):
    tenant = await TenantDirectory(session).create(name="Acme", subdomain="acme")
    await session.commit()

    assert tenant.created_at.tzinfo is not None
    assert tenant.updated_at.tzinfo is not None


@pytest.mark.asyncio
async def test_user_for_unknown_tenant_is_not_a_duplicate(session, hasher):
    await session.execute(text("PRAGMA foreign_keys=ON"))
    store = IdentityStore(session, hasher)

    with pytest.raises(PersistenceError):
        await store.create(uuid.uuid4(), "a@b.io", "password123", "Orphan")
    await session.rollback()
