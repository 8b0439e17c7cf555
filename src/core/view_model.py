"""
Calcolo puro della vista: filtro per modalità, filtro competizione,
ordinamento e costruzione delle card.

Nessuna dipendenza dal display: la UI riceve un ViewModel già pronto
e si limita a disegnarlo.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from core.models import Fixture, FixtureDataset

if TYPE_CHECKING:  # pragma: no cover
    from core.state import AppState

VIEW_LIVE = "live"
VIEW_FINISHED = "finished"
VIEW_TODAY = "today"
VIEWS = (VIEW_LIVE, VIEW_FINISHED, VIEW_TODAY)

ALL_COMPETITIONS = "all"

STATUS_NOT_STARTED = "NS"
STATUS_FULL_TIME = "FT"

SCORE_PLACEHOLDER = "-"
VENUE_PLACEHOLDER = "Sede N/D"
REFEREE_PLACEHOLDER = "Arbitro N/D"
DATE_PLACEHOLDER = "Data N/D"
EMPTY_PLACEHOLDER = "Nessuna partita trovata per questa modalità."


@dataclass(frozen=True)
class TeamCard:
    name: str
    logo: Optional[str]
    score: str


@dataclass(frozen=True)
class EventLine:
    time: str
    type: str
    detail: str
    player: Optional[str] = None
    assist: Optional[str] = None


@dataclass(frozen=True)
class Card:
    fixture_id: Optional[int]
    league_name: str
    league_logo: Optional[str]
    league_round: str
    home: TeamCard
    away: TeamCard
    date_text: str
    status_text: str
    venue_text: str
    referee_text: str
    events: Tuple[EventLine, ...] = ()


@dataclass(frozen=True)
class ViewModel:
    view: str
    competition_filter: str
    competitions: Tuple[str, ...]
    cards: Tuple[Card, ...] = ()
    placeholder: Optional[str] = None
    notice: Optional[str] = None


def _section(obj: Any, key: str) -> Dict[str, Any]:
    value = obj.get(key) if isinstance(obj, dict) else None
    return value if isinstance(value, dict) else {}


def _status_short(item: Fixture) -> Optional[str]:
    return _section(_section(item, "fixture"), "status").get("short")


def _league_name(item: Fixture) -> Optional[str]:
    return _section(item, "league").get("name")


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None


def _local(dt: datetime, tz: Optional[tzinfo]) -> datetime:
    # Date naive dall'upstream: le consideriamo già in ora locale
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def collation_key(value: str) -> Tuple[str, str]:
    """
    Chiave di confronto insensibile ad accenti e maiuscole (ordine 'umano').
    A parità di lettere le minuscole precedono le maiuscole.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value.swapcase()


def is_today(date_string: Optional[str], now: Optional[datetime] = None) -> bool:
    dt = _parse_dt(date_string)
    if dt is None:
        return False
    now = now or datetime.now().astimezone()
    return _local(dt, now.tzinfo).date() == now.date()


def filter_for_view(
    view: str,
    live_fixtures: FixtureDataset,
    scheduled_fixtures: FixtureDataset,
    now: Optional[datetime] = None,
) -> List[Fixture]:
    if view == VIEW_LIVE:
        return list(live_fixtures)
    if view == VIEW_FINISHED:
        return [f for f in scheduled_fixtures if _status_short(f) != STATUS_NOT_STARTED]
    if view == VIEW_TODAY:
        return [
            f
            for f in scheduled_fixtures
            if is_today(_section(f, "fixture").get("date"), now) and _status_short(f) == STATUS_NOT_STARTED
        ]
    raise ValueError(f"Vista sconosciuta: {view!r}")


def apply_competition_filter(fixtures: Iterable[Fixture], competition: str) -> List[Fixture]:
    if competition == ALL_COMPETITIONS:
        return list(fixtures)
    return [f for f in fixtures if _league_name(f) == competition]


def sort_fixtures(fixtures: Iterable[Fixture]) -> List[Fixture]:
    """
    Competizioni con standings prima, poi ordine alfabetico per nome lega.
    sorted() è stabile: a parità di chiavi resta l'ordine di arrivo.
    """

    def _key(item: Fixture) -> Tuple[int, Tuple[str, str]]:
        league = _section(item, "league")
        major = 0 if league.get("standings") else 1
        return major, collation_key(league.get("name") or "")

    return sorted(fixtures, key=_key)


def competition_options(*collections: FixtureDataset) -> List[str]:
    names = set()
    for fixtures in collections:
        for item in fixtures:
            name = _league_name(item)
            if name:
                names.add(name)
    return [ALL_COMPETITIONS] + sorted(names, key=collation_key)


def resolve_score(item: Fixture, side: str) -> str:
    goals = _section(item, "goals")
    if goals.get(side) is not None:
        return str(goals[side])
    fulltime = _section(_section(item, "score"), "fulltime")
    if fulltime.get(side) is not None:
        return str(fulltime[side])
    return SCORE_PLACEHOLDER


def format_match_date(date_string: Optional[str], tz: Optional[tzinfo] = None) -> str:
    dt = _parse_dt(date_string)
    if dt is None:
        return DATE_PLACEHOLDER
    return _local(dt, tz).strftime("%d/%m/%Y, %H:%M:%S")


def status_text(status: Dict[str, Any]) -> str:
    text = status.get("long") or ""
    if status.get("elapsed"):
        text += f" ({status['elapsed']}')"
    return text


def venue_text(venue: Dict[str, Any]) -> str:
    name = venue.get("name")
    if not name:
        return VENUE_PLACEHOLDER
    city = venue.get("city")
    return f"{name} - {city}" if city else name


def _event_line(event: Dict[str, Any]) -> EventLine:
    elapsed = _section(event, "time").get("elapsed")
    return EventLine(
        time=f"{elapsed}'" if elapsed else "",
        type=str(event.get("type") or ""),
        detail=str(event.get("detail") or ""),
        player=_section(event, "player").get("name") or None,
        assist=_section(event, "assist").get("name") or None,
    )


def _team_card(item: Fixture, side: str) -> TeamCard:
    team = _section(_section(item, "teams"), side)
    return TeamCard(name=team.get("name") or "", logo=team.get("logo"), score=resolve_score(item, side))


def build_card(item: Fixture, view: str, tz: Optional[tzinfo] = None) -> Card:
    fix = _section(item, "fixture")
    status = _section(fix, "status")
    league = _section(item, "league")

    events: Tuple[EventLine, ...] = ()
    raw_events = item.get("events")
    if (view == VIEW_LIVE or status.get("short") == STATUS_FULL_TIME) and raw_events:
        events = tuple(_event_line(ev) for ev in raw_events if isinstance(ev, dict))

    return Card(
        fixture_id=fix.get("id"),
        league_name=league.get("name") or "",
        league_logo=league.get("logo"),
        league_round=league.get("round") or "",
        home=_team_card(item, "home"),
        away=_team_card(item, "away"),
        date_text=format_match_date(fix.get("date"), tz),
        status_text=status_text(status),
        venue_text=venue_text(_section(fix, "venue")),
        referee_text=fix.get("referee") or REFEREE_PLACEHOLDER,
        events=events,
    )


def build_view_model(state: "AppState", now: Optional[datetime] = None) -> ViewModel:
    """
    Vista corrente -> filtro competizione -> ordinamento -> card.
    Funzione pura: stesso stato e stesso 'now' producono lo stesso ViewModel.
    """
    now = now or datetime.now().astimezone()
    fixtures = filter_for_view(state.current_view, state.live_fixtures, state.scheduled_fixtures, now)
    fixtures = apply_competition_filter(fixtures, state.competition_filter)
    fixtures = sort_fixtures(fixtures)

    error = state.error_for_view()
    notice = f"Dati non disponibili: {error}" if error else None

    cards = tuple(build_card(item, state.current_view, now.tzinfo) for item in fixtures)
    return ViewModel(
        view=state.current_view,
        competition_filter=state.competition_filter,
        competitions=tuple(state.competitions),
        cards=cards,
        placeholder=None if cards else EMPTY_PLACEHOLDER,
        notice=notice,
    )
