from __future__ import annotations

from fastapi import FastAPI

from core.config import get_settings
from core.logging import get_logger

from api.routes.health import router as health_router
from api.routes.fixtures import router as fixtures_router

logger = get_logger("api.app")


def create_app() -> FastAPI:
    app = FastAPI(title="Fixtures Proxy API", version="0.1.0")
    try:
        if not get_settings().football_api_key:
            logger.warning("FOOTBALL_API_KEY non impostata: le chiamate upstream falliranno")
    except Exception as exc:  # pragma: no cover
        logger.error("Impossibile caricare settings: %s", exc)

    app.include_router(health_router)
    app.include_router(fixtures_router)
    return app


app = create_app()
