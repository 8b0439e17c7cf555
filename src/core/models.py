from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict


class FixtureStatus(TypedDict, total=False):
    short: str                # NS, 1H, HT, 2H, FT, ...
    long: str
    elapsed: Optional[int]


class Venue(TypedDict, total=False):
    name: Optional[str]
    city: Optional[str]


class FixtureInfo(TypedDict, total=False):
    id: int
    date: str                 # ISO 8601 con offset
    status: FixtureStatus
    venue: Venue
    referee: Optional[str]


class League(TypedDict, total=False):
    id: int
    name: str
    logo: str
    round: str
    standings: bool


class Team(TypedDict, total=False):
    name: str
    logo: str


class Teams(TypedDict, total=False):
    home: Team
    away: Team


class Goals(TypedDict, total=False):
    home: Optional[int]
    away: Optional[int]


class Score(TypedDict, total=False):
    fulltime: Goals


class Fixture(TypedDict, total=False):
    fixture: FixtureInfo
    league: League
    teams: Teams
    goals: Goals
    score: Score
    events: List[Dict[str, Any]]


FixtureDataset = List[Fixture]


@dataclass(frozen=True)
class FetchResult:
    """Esito di una fetch: lista di fixtures oppure motivo del fallimento."""

    ok: bool
    fixtures: FixtureDataset = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, fixtures: FixtureDataset) -> "FetchResult":
        return cls(ok=True, fixtures=list(fixtures))

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(ok=False, error=reason)
