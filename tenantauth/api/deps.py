"""FastAPI dependencies for sessions, services and bearer tokens."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tenantauth.core.errors import TokenInvalidError
from tenantauth.services.authentication import AuthenticationService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session from the app's database."""
    async with request.app.state.database.session_factory() as session:
        yield session


def get_auth_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuthenticationService:
    state = request.app.state
    return AuthenticationService(
        session,
        state.hasher,
        state.token_issuer,
        token_ttl=timedelta(minutes=state.settings.jwt_expire_minutes),
        reject_inactive_users=state.settings.reject_inactive_users,
    )


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Extract ``<token>`` from ``Authorization: Bearer <token>``."""
    if credentials is None or not credentials.credentials:
        raise TokenInvalidError("Missing bearer token")
    return credentials.credentials


# Typed shorthand for use in route signatures
AuthService = Annotated[AuthenticationService, Depends(get_auth_service)]
BearerToken = Annotated[str, Depends(get_bearer_token)]
