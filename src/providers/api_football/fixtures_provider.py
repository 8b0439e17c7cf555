from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from core.logging import get_logger
from .http_client import APIFootballHttpClient, get_http_client

log = get_logger(__name__)


def format_date(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def extract_response(data: Any, label: str) -> List[Dict[str, Any]]:
    """'response' della risposta upstream; assente o non lista => lista vuota."""
    response = data.get("response") if isinstance(data, dict) else None
    if not isinstance(response, list):
        log.warning("Formato inatteso (%s): 'response' non è una lista", label)
        return []
    return response


class ApiFootballFixturesProvider:
    """
    Provider delle fixtures per il proxy.
    - live: risposta upstream grezza, senza trasformazioni
    - scheduled: unione delle fixtures di oggi e di ieri (oggi prima)
    """

    def __init__(self, client: Optional[APIFootballHttpClient] = None) -> None:
        self._client = client or get_http_client()

    def fetch_live(self) -> Dict[str, Any]:
        return self._client.api_get("/fixtures", params={"live": "all"})

    def fetch_scheduled(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        yesterday = today - timedelta(days=1)

        # Chiamate sequenziali: un errore su una delle due interrompe tutto
        data_today = self._client.api_get("/fixtures", params={"date": format_date(today)})
        data_yesterday = self._client.api_get("/fixtures", params={"date": format_date(yesterday)})

        merged = extract_response(data_today, format_date(today)) + extract_response(
            data_yesterday, format_date(yesterday)
        )
        log.info(
            "scheduled fixtures oggi=%s ieri=%s totale=%s",
            format_date(today),
            format_date(yesterday),
            len(merged),
            extra={"fixture_count": len(merged)},
        )
        return {"response": merged}
