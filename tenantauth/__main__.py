"""Run the API under uvicorn: ``python -m tenantauth``."""

import uvicorn

from tenantauth.core.config import get_settings
from tenantauth.main import create_app

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
