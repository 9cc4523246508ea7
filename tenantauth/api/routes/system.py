"""Liveness probe: reports whether the database is reachable."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    connected = await request.app.state.database.ping()
    return JSONResponse(
        status_code=status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if connected else "error",
            "database": "connected" if connected else "disconnected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
