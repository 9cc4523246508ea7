"""FastAPI application factory.

Run with ``uvicorn tenantauth.main:create_app --factory`` or ``python -m tenantauth``.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenantauth.api.errors import register_error_handlers
from tenantauth.api.routes import api_router
from tenantauth.core.config import Settings, get_settings
from tenantauth.core.database import Database
from tenantauth.core.security import CredentialHasher, TokenIssuer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: ensure tables exist (use Alembic in production)
    await app.state.database.init_db()
    logger.info("Tenant auth service started")
    yield
    await app.state.database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app. Fails fast if settings (notably the JWT secret) are invalid."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Tenant Auth",
        version="0.1.0",
        description="Multi-tenant registration, login and session API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.hasher = CredentialHasher.from_settings(settings)
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    # ── CORS ─────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── API routes ───────────────────────────────────────────
    app.include_router(api_router)
    register_error_handlers(app)
    return app
