from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.logging import get_logger
from providers.api_football.fixtures_provider import ApiFootballFixturesProvider

router = APIRouter(prefix="/api", tags=["fixtures"])
logger = get_logger("api.routes.fixtures")


def get_provider() -> ApiFootballFixturesProvider:
    return ApiFootballFixturesProvider()


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@router.get("/live-fixtures", summary="Partite live (passthrough upstream)")
def live_fixtures() -> Any:
    try:
        return get_provider().fetch_live()
    except Exception as exc:
        logger.error("Errore durante la richiesta live fixtures: %s", exc, exc_info=True)
        return _error("Errore nel recupero delle live fixtures")


@router.get("/scheduled-fixtures", summary="Partite di oggi e di ieri")
def scheduled_fixtures() -> Any:
    try:
        return get_provider().fetch_scheduled()
    except Exception as exc:
        logger.error("Errore durante la richiesta scheduled fixtures: %s", exc, exc_info=True)
        return _error("Errore nel recupero delle scheduled fixtures")
