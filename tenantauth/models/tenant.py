"""Tenant model: top-level isolation boundary."""

import uuid

from sqlmodel import Field, SQLModel

from tenantauth.models.base import CamelModel, TimestampMixin, new_uuid

DEFAULT_PLAN = "free"
DEFAULT_MAX_USERS = 5
DEFAULT_MAX_PROJECTS = 3


class Tenant(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    # Login-time selector; unique across all tenants, never updated
    subdomain: str = Field(max_length=100, unique=True, nullable=False, index=True)

    # Plan quotas, stored but not enforced here
    subscription_plan: str = Field(default=DEFAULT_PLAN, max_length=50)
    max_users: int = Field(default=DEFAULT_MAX_USERS)
    max_projects: int = Field(default=DEFAULT_MAX_PROJECTS)


# ── Public projection ────────────────────────────────────────

class TenantSummary(CamelModel):
    id: uuid.UUID
    name: str
    subdomain: str
    subscription_plan: str
    max_users: int
    max_projects: int
