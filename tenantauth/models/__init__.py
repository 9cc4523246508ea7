"""Import all models so SQLModel.metadata picks them up."""

from tenantauth.models.tenant import Tenant, TenantSummary
from tenantauth.models.user import TenantUserPublic, User, UserPublic, UserRole

__all__ = [
    "Tenant",
    "TenantSummary",
    "TenantUserPublic",
    "User",
    "UserPublic",
    "UserRole",
]
