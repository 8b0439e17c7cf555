from datetime import date

import pytest

from providers.api_football.fixtures_provider import ApiFootballFixturesProvider, extract_response


class FakeClient:
    """Risponde in sequenza; registra i parametri di ogni chiamata."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls = []

    def api_get(self, path, params=None):
        self.calls.append((path, params))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_live_is_passthrough():
    raw = {"get": "fixtures", "parameters": {"live": "all"}, "response": [{"fixture": {"id": 1}}]}
    client = FakeClient(raw)
    out = ApiFootballFixturesProvider(client).fetch_live()
    assert out is raw
    assert client.calls == [("/fixtures", {"live": "all"})]


def test_scheduled_merges_today_then_yesterday():
    a, b, c = {"fixture": {"id": "A"}}, {"fixture": {"id": "B"}}, {"fixture": {"id": "C"}}
    client = FakeClient({"response": [a, b]}, {"response": [c]})
    out = ApiFootballFixturesProvider(client).fetch_scheduled(today=date(2024, 3, 1))
    assert out == {"response": [a, b, c]}
    # Cambio mese/anno bisestile gestito da timedelta
    assert client.calls == [
        ("/fixtures", {"date": "2024-03-01"}),
        ("/fixtures", {"date": "2024-02-29"}),
    ]


def test_scheduled_missing_response_treated_as_empty():
    c = {"fixture": {"id": "C"}}
    client = FakeClient({"errors": ["quota"]}, {"response": [c]})
    assert ApiFootballFixturesProvider(client).fetch_scheduled(today=date(2024, 1, 1)) == {"response": [c]}

    client = FakeClient({"response": "boh"}, {"response": None})
    assert ApiFootballFixturesProvider(client).fetch_scheduled(today=date(2024, 1, 1)) == {"response": []}


def test_scheduled_failure_aborts():
    client = FakeClient(RuntimeError("boom"), {"response": []})
    with pytest.raises(RuntimeError):
        ApiFootballFixturesProvider(client).fetch_scheduled(today=date(2024, 1, 1))
    # La seconda chiamata non parte
    assert len(client.calls) == 1


def test_extract_response_non_dict():
    assert extract_response(["x"], "oggi") == []
