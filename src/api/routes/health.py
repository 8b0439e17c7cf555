from __future__ import annotations

from fastapi import APIRouter
from core.config import get_settings

router = APIRouter(tags=["health"])

@router.get("/health", summary="Health check")
def health():
    """
    Health endpoint minimale: non chiama l'upstream.
    """
    settings = get_settings()
    return {
        "status": "ok",
        "api_key_configured": bool(settings.football_api_key),
    }
