"""User model: belongs to exactly one tenant."""

import uuid
from enum import StrEnum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from tenantauth.models.base import CamelModel, TimestampMixin, new_uuid


class UserRole(StrEnum):
    TENANT_ADMIN = "tenant_admin"
    USER = "user"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
    )

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    email: str = Field(max_length=320, nullable=False, index=True)
    password_hash: str = Field(nullable=False)
    full_name: str = Field(default="", max_length=255)
    role: str = Field(default=UserRole.USER.value, max_length=50)
    is_active: bool = Field(default=True)


# ── Public projections (never include password_hash) ─────────

class UserPublic(CamelModel):
    id: uuid.UUID
    email: str
    full_name: str
    role: str


class TenantUserPublic(UserPublic):
    tenant_id: uuid.UUID
