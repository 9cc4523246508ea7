"""Authentication endpoints: tenant registration, login, current user."""

from typing import Generic, TypeVar

from fastapi import APIRouter, status
from pydantic import EmailStr, Field

from tenantauth.api.deps import AuthService, BearerToken
from tenantauth.models.base import CamelModel
from tenantauth.services.authentication import CurrentUser, LoginResult, RegisteredTenant

router = APIRouter(prefix="/auth", tags=["auth"])

T = TypeVar("T")


# ── Schemas ──────────────────────────────────────────────────

class Envelope(CamelModel, Generic[T]):
    success: bool = True
    data: T


class RegisterTenantRequest(CamelModel):
    tenant_name: str = Field(max_length=255)
    subdomain: str = Field(max_length=100)
    admin_email: EmailStr
    admin_password: str = Field(max_length=128)
    admin_full_name: str = Field(max_length=255)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(max_length=128)
    tenant_subdomain: str = Field(max_length=100)


# ── Routes ───────────────────────────────────────────────────

@router.post(
    "/register-tenant",
    response_model=Envelope[RegisteredTenant],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new tenant and its admin user",
)
async def register_tenant(
    body: RegisterTenantRequest,
    service: AuthService,
) -> Envelope[RegisteredTenant]:
    """Create a tenant plus its first ``tenant_admin`` user in one transaction."""
    registered = await service.register_tenant(
        tenant_name=body.tenant_name,
        subdomain=body.subdomain,
        admin_email=body.admin_email,
        admin_password=body.admin_password,
        admin_full_name=body.admin_full_name,
    )
    return Envelope[RegisteredTenant](data=registered)


@router.post("/login", response_model=Envelope[LoginResult])
async def login(body: LoginRequest, service: AuthService) -> Envelope[LoginResult]:
    """Authenticate against a tenant, receive a bearer token."""
    result = await service.login(
        email=body.email,
        password=body.password,
        tenant_subdomain=body.tenant_subdomain,
    )
    return Envelope[LoginResult](data=result)


@router.get("/me", response_model=Envelope[CurrentUser])
async def get_me(token: BearerToken, service: AuthService) -> Envelope[CurrentUser]:
    """Return the authenticated user and their tenant."""
    return Envelope[CurrentUser](data=await service.current_user(token))
