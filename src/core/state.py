from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.logging import get_logger
from core.models import FetchResult, FixtureDataset
from core.view_model import (
    ALL_COMPETITIONS,
    VIEW_FINISHED,
    VIEW_LIVE,
    VIEW_TODAY,
    VIEWS,
    competition_options,
)

logger = get_logger("core.state")

KIND_LIVE = "live"
KIND_SCHEDULED = "scheduled"

_VIEWS_BY_KIND = {
    KIND_LIVE: {VIEW_LIVE},
    KIND_SCHEDULED: {VIEW_FINISHED, VIEW_TODAY},
}


@dataclass
class AppState:
    """
    Stato della pagina: vista attiva, filtro competizione e le due collezioni.
    Le collezioni vengono sostituite in blocco ad ogni fetch riuscita.
    """

    current_view: str = VIEW_LIVE
    competition_filter: str = ALL_COMPETITIONS
    live_fixtures: FixtureDataset = field(default_factory=list)
    scheduled_fixtures: FixtureDataset = field(default_factory=list)
    competitions: List[str] = field(default_factory=lambda: [ALL_COMPETITIONS])
    live_error: Optional[str] = None
    scheduled_error: Optional[str] = None
    generation: int = 0

    def error_for_view(self) -> Optional[str]:
        if self.current_view == VIEW_LIVE:
            return self.live_error
        return self.scheduled_error


def view_depends_on(view: str, kind: str) -> bool:
    return view in _VIEWS_BY_KIND.get(kind, set())


def select_view(state: AppState, view: str) -> None:
    if view not in VIEWS:
        raise ValueError(f"Vista sconosciuta: {view!r}")
    state.current_view = view


def select_competition(state: AppState, competition: str) -> None:
    if competition not in state.competitions:
        raise ValueError(f"Competizione sconosciuta: {competition!r}")
    state.competition_filter = competition


def begin_load(state: AppState) -> int:
    """Apre un nuovo ciclo di caricamento: i risultati dei cicli precedenti verranno ignorati."""
    state.generation += 1
    return state.generation


def refresh_competitions(state: AppState) -> None:
    state.competitions = competition_options(state.live_fixtures, state.scheduled_fixtures)
    if state.competition_filter not in state.competitions:
        state.competition_filter = ALL_COMPETITIONS


def apply_fetch_result(state: AppState, kind: str, result: FetchResult, generation: int) -> bool:
    """
    Applica l'esito di una fetch allo stato.

    Ritorna True se la vista attiva dipende dalla collezione aggiornata
    (serve un nuovo render), False altrimenti o se il risultato è obsoleto.
    """
    if kind not in _VIEWS_BY_KIND:
        raise ValueError(f"Collezione sconosciuta: {kind!r}")
    if generation != state.generation:
        logger.info("Risultato %s obsoleto ignorato (generation=%s, corrente=%s)", kind, generation, state.generation)
        return False

    if result.ok:
        if kind == KIND_LIVE:
            state.live_fixtures = list(result.fixtures)
            state.live_error = None
        else:
            state.scheduled_fixtures = list(result.fixtures)
            state.scheduled_error = None
        refresh_competitions(state)
    else:
        if kind == KIND_LIVE:
            state.live_error = result.error
        else:
            state.scheduled_error = result.error

    return view_depends_on(state.current_view, kind)
