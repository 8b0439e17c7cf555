import asyncio

import httpx

from client.proxy_client import ProxyClient, load_fixtures
from core.state import AppState, begin_load


def make_client(routes):
    """routes: path -> httpx.Response oppure eccezione da sollevare."""

    def handler(request: httpx.Request) -> httpx.Response:
        item = routes[request.url.path]
        if isinstance(item, Exception):
            raise item
        return item

    return ProxyClient(base_url="http://proxy.test", transport=httpx.MockTransport(handler))


def test_fetch_success(make_fixture):
    client = make_client({"/api/live-fixtures": httpx.Response(200, json={"response": [make_fixture(1)]})})
    result = asyncio.run(client.fetch_live())
    assert result.ok is True
    assert result.fixtures[0]["fixture"]["id"] == 1


def test_fetch_server_error():
    client = make_client({"/api/live-fixtures": httpx.Response(500, json={"error": "Errore"})})
    result = asyncio.run(client.fetch_live())
    assert result.ok is False
    assert "500" in result.error


def test_fetch_network_error():
    client = make_client({"/api/scheduled-fixtures": httpx.ConnectError("refused")})
    result = asyncio.run(client.fetch_scheduled())
    assert result.ok is False
    assert result.error == "server non raggiungibile"


def test_fetch_bad_payload():
    client = make_client(
        {
            "/api/live-fixtures": httpx.Response(200, json={"response": "nope"}),
            "/api/scheduled-fixtures": httpx.Response(200, text="<html>"),
        }
    )
    assert asyncio.run(client.fetch_live()).error == "risposta non valida"
    assert asyncio.run(client.fetch_scheduled()).error == "risposta non valida"


def test_load_fixtures_updates_both_collections(make_fixture):
    client = make_client(
        {
            "/api/live-fixtures": httpx.Response(200, json={"response": [make_fixture(1, league="Serie A")]}),
            "/api/scheduled-fixtures": httpx.Response(
                200, json={"response": [make_fixture(2, league="La Liga"), make_fixture(3, league="Serie A")]}
            ),
        }
    )
    state = AppState(current_view="live")
    renders = asyncio.run(load_fixtures(state, client))
    assert renders == {"live": True, "scheduled": False}
    assert len(state.live_fixtures) == 1
    assert len(state.scheduled_fixtures) == 2
    assert state.competitions == ["all", "La Liga", "Serie A"]


def test_load_fixtures_failures_are_independent(make_fixture):
    client = make_client(
        {
            "/api/live-fixtures": httpx.ConnectError("refused"),
            "/api/scheduled-fixtures": httpx.Response(200, json={"response": [make_fixture(2)]}),
        }
    )
    state = AppState(current_view="finished", live_fixtures=[make_fixture(9)])
    renders = asyncio.run(load_fixtures(state, client))
    assert renders == {"live": False, "scheduled": True}
    assert [f["fixture"]["id"] for f in state.live_fixtures] == [9]
    assert state.live_error == "server non raggiungibile"
    assert state.scheduled_error is None


def test_load_fixtures_bumps_generation():
    client = make_client(
        {
            "/api/live-fixtures": httpx.Response(200, json={"response": []}),
            "/api/scheduled-fixtures": httpx.Response(200, json={"response": []}),
        }
    )
    state = AppState()
    begin_load(state)
    asyncio.run(load_fixtures(state, client))
    assert state.generation == 2


def test_on_update_only_for_active_view(make_fixture):
    client = make_client(
        {
            "/api/live-fixtures": httpx.Response(200, json={"response": [make_fixture(1)]}),
            "/api/scheduled-fixtures": httpx.Response(200, json={"response": [make_fixture(2)]}),
        }
    )
    updates = []
    state = AppState(current_view="today")
    asyncio.run(load_fixtures(state, client, on_update=updates.append))
    assert updates == ["scheduled"]


def test_live_painted_before_scheduled_completes(make_fixture):
    live_painted = None
    painted = []

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/live-fixtures":
            return httpx.Response(200, json={"response": [make_fixture(1)]})
        # La risposta scheduled arriva solo dopo il render della vista live
        await asyncio.wait_for(live_painted.wait(), timeout=2)
        return httpx.Response(200, json={"response": [make_fixture(2)]})

    def on_update(kind):
        painted.append((kind, len(state.live_fixtures), len(state.scheduled_fixtures)))
        live_painted.set()

    async def run():
        nonlocal live_painted
        live_painted = asyncio.Event()
        client = ProxyClient(base_url="http://proxy.test", transport=httpx.MockTransport(handler))
        return await load_fixtures(state, client, on_update=on_update)

    state = AppState(current_view="live")
    renders = asyncio.run(run())
    assert painted == [("live", 1, 0)]
    assert renders == {"live": True, "scheduled": False}
    assert len(state.scheduled_fixtures) == 1
