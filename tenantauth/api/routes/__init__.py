"""API router aggregation."""

from fastapi import APIRouter

from tenantauth.api.routes.auth import router as auth_router
from tenantauth.api.routes.system import router as system_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(system_router)
