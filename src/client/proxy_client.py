from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Dict, List, Optional

import httpx

from core.config import get_settings
from core.logging import get_logger
from core.models import FetchResult
from core.state import KIND_LIVE, KIND_SCHEDULED, AppState, apply_fetch_result, begin_load

logger = get_logger(__name__)

_PATHS = {
    KIND_LIVE: "/api/live-fixtures",
    KIND_SCHEDULED: "/api/scheduled-fixtures",
}


class ProxyClient:
    """
    Client asincrono verso il proxy fixtures.
    Non solleva mai: ogni problema diventa un FetchResult di fallimento.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or get_settings().fixtures_api_url).rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # timeout=None: nessun timeout oltre a quello del trasporto
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport, timeout=None)

    async def fetch(self, kind: str) -> FetchResult:
        path = _PATHS[kind]
        start = time.perf_counter()
        try:
            async with self._client() as client:
                resp = await client.get(path)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Errore nel recupero delle partite %s: status=%s", kind, exc.response.status_code)
            return FetchResult.failure(f"il server ha risposto {exc.response.status_code}")
        except httpx.HTTPError as exc:
            logger.error("Errore nel recupero delle partite %s: %s", kind, exc)
            return FetchResult.failure("server non raggiungibile")
        except ValueError as exc:
            logger.error("Risposta non JSON per %s: %s", kind, exc)
            return FetchResult.failure("risposta non valida")

        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, list):
            logger.warning("Formato inatteso (%s): 'response' non è una lista", kind)
            return FetchResult.failure("risposta non valida")

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Partite %s ricevute: %s",
            kind,
            len(response),
            extra={"fixture_count": len(response), "latency_ms": round(elapsed, 1)},
        )
        return FetchResult.success(response)

    async def fetch_live(self) -> FetchResult:
        return await self.fetch(KIND_LIVE)

    async def fetch_scheduled(self) -> FetchResult:
        return await self.fetch(KIND_SCHEDULED)


async def load_fixtures(
    state: AppState,
    client: ProxyClient,
    on_update: Optional[Callable[[str], None]] = None,
) -> Dict[str, bool]:
    """
    Avvia le due fetch in parallelo; ciascuna aggiorna lo stato appena termina,
    indipendentemente dall'altra.

    on_update(kind) viene chiamata subito, per ogni collezione, solo se la
    vista attiva dipende da quella collezione.
    Ritorna, per collezione, se la vista attiva andava ridisegnata.
    """
    generation = begin_load(state)
    renders: Dict[str, bool] = {}

    async def _load(kind: str) -> None:
        result = await client.fetch(kind)
        renders[kind] = apply_fetch_result(state, kind, result, generation)
        if renders[kind] and on_update is not None:
            on_update(kind)

    tasks: List[Any] = [asyncio.create_task(_load(kind)) for kind in (KIND_LIVE, KIND_SCHEDULED)]
    await asyncio.gather(*tasks)
    return renders


def load_fixtures_sync(
    state: AppState,
    client: Optional[ProxyClient] = None,
    on_update: Optional[Callable[[str], None]] = None,
) -> Dict[str, bool]:
    return asyncio.run(load_fixtures(state, client or ProxyClient(), on_update))
