import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from core.config import _reset_settings_cache_for_tests  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()


@pytest.fixture
def make_fixture():
    """Factory di fixture nel formato API-Football (solo i campi usati)."""

    def _make(
        fixture_id=1,
        league="Serie A",
        standings=True,
        status="NS",
        date="2024-08-30T18:45:00+00:00",
        goals=(None, None),
        fulltime=(None, None),
        events=None,
        **extra,
    ):
        item = {
            "fixture": {
                "id": fixture_id,
                "date": date,
                "status": {"short": status, "long": extra.get("long", status), "elapsed": extra.get("elapsed")},
                "venue": extra.get("venue", {"name": "Stadio Olimpico", "city": "Roma"}),
                "referee": extra.get("referee", "D. Orsato"),
            },
            "league": {
                "id": 135,
                "name": league,
                "logo": "https://media.api-sports.io/football/leagues/135.png",
                "round": "Regular Season - 3",
                "standings": standings,
            },
            "teams": {
                "home": {"name": "Team A", "logo": "https://media.api-sports.io/football/teams/1.png"},
                "away": {"name": "Team B", "logo": "https://media.api-sports.io/football/teams/2.png"},
            },
            "goals": {"home": goals[0], "away": goals[1]},
            "score": {"fulltime": {"home": fulltime[0], "away": fulltime[1]}},
        }
        if events is not None:
            item["events"] = events
        return item

    return _make
