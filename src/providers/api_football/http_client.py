from __future__ import annotations

import time
from typing import Any, Dict, Optional

import requests

from core.config import Settings, get_settings
from core.logging import get_logger
from .exceptions import InvalidPayloadError, UpstreamUnavailableError

log = get_logger(__name__)


class APIFootballHttpClient:
    """
    Client HTTP per API Football (versione requests), senza retry.
    Aggiunge l'header con la API key e ritorna il JSON decodificato.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._session = requests.Session()
        self._session.headers.update(
            {
                "x-apisports-key": self._settings.require_api_key(),
                "Accept": "application/json",
            }
        )
        self._base_url = self._settings.api_football_base_url
        self._timeout = self._settings.api_football_timeout

    def api_get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}/{path.lstrip('/')}"
        log.info("api_football GET %s params=%s", path, params)
        start = time.perf_counter()

        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"Errore di rete verso {path}: {e}") from e

        latency_ms = (time.perf_counter() - start) * 1000

        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidPayloadError(
                f"Risposta non valida (non JSON) status={resp.status_code} path={path}"
            ) from e

        # Il proxy inoltra il body così com'è anche con status non 2xx
        if not 200 <= resp.status_code < 300:
            log.warning(
                "api_football status=%s path=%s body=%s",
                resp.status_code,
                path,
                str(data)[:300],
            )
        log.debug(
            "api_football OK %s status=%s",
            path,
            resp.status_code,
            extra={"upstream": path, "latency_ms": round(latency_ms, 2)},
        )
        return data


def get_http_client() -> APIFootballHttpClient:
    """
    Restituisce sempre una nuova istanza per far sì che i test che
    modificano le variabili d'ambiente abbiano effetto immediato.
    """
    return APIFootballHttpClient()
