"""
Route tests for profile_dashboard.main using FastAPI's TestClient.

The GitHub datasource is swapped for FakeSource through dependency_overrides.
"""
import pytest
from fastapi.testclient import TestClient

from conftest import FakeSource
from profile_dashboard import main
from profile_dashboard.errors import HttpError, NotFound, RateLimited


@pytest.fixture
def client(fake_source):
    main.sessions.clear()
    main.app.dependency_overrides[main.get_datasource] = lambda: fake_source
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
    main.sessions.clear()


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"


def test_quick_picks(client):
    assert client.get("/api/quick-picks").json()["usernames"] == main.settings.quick_picks


def test_dashboard_endpoint(client):
    resp = client.get("/api/dashboard", params={"username": "octocat"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["profile"]["login"] == "@octocat"
    assert [c["key"] for c in body["stats"]["counters"]] == ["stars", "repos", "followers", "forks"]
    assert body["stats"]["counters"][0]["display"] == "1.6k"
    assert len(body["activity"]["chart"]["labels"]) == 12


@pytest.mark.parametrize("error, status", [(NotFound(), 404), (RateLimited(), 429), (HttpError(500), 502)])
def test_dashboard_endpoint_errors(client, fake_source, error, status):
    fake_source.errors["octocat"] = error
    resp = client.get("/api/dashboard", params={"username": "octocat"})
    assert resp.status_code == status
    assert "title" in resp.json()["detail"]


def test_dashboard_requires_username(client):
    assert client.get("/api/dashboard").status_code == 422
    assert client.get("/api/dashboard", params={"username": "  "}).status_code == 400


def test_session_flow(client, fake_source):
    assert client.get("/api/session").json()["panel"] == "search"

    fake_source.errors["ghost"] = NotFound()
    state = client.post("/api/session/search", json={"username": "ghost"}).json()
    assert state["panel"] == "error"
    assert state["error"]["title"] == "User not found"

    del fake_source.errors["ghost"]
    fake_source.projects["ghost"] = fake_source.projects["octocat"]
    state = client.post("/api/session/retry").json()
    assert state["panel"] == "dashboard"
    assert state["visible"] == {"search": False, "loading": False, "error": False, "dashboard": True}
    assert len(state["charts"]) == 2

    state = client.post("/api/session/back").json()
    assert state["panel"] == "search"
    assert state["charts"] == []


def test_sessions_are_independent(client):
    client.post("/api/session/quick/octocat", headers={"X-Session-Id": "a"})
    assert client.get("/api/session", headers={"X-Session-Id": "a"}).json()["panel"] == "dashboard"
    assert client.get("/api/session", headers={"X-Session-Id": "b"}).json()["panel"] == "search"


def test_escaped_identifier_in_session_error(client, fake_source):
    username = "<img src=x>"
    fake_source.errors[username] = NotFound()
    state = client.post("/api/session/search", json={"username": username}).json()
    assert "&lt;img src=x&gt;" in state["error"]["message"]
    assert isinstance(main.sessions["default"].source, FakeSource)


def test_session_map_is_capped(client, monkeypatch):
    monkeypatch.setattr(main.settings, "max_sessions", 3)
    client.post("/api/session/quick/octocat", headers={"X-Session-Id": "a"})
    evicted = main.sessions["a"]
    evicted_charts = [slot.handle for slot in evicted.slots.values()]
    for session_id in ("b", "c", "d"):
        client.get("/api/session", headers={"X-Session-Id": session_id})

    assert list(main.sessions) == ["b", "c", "d"]
    assert all(handle.destroyed for handle in evicted_charts)


def test_recently_used_session_survives(client, monkeypatch):
    monkeypatch.setattr(main.settings, "max_sessions", 2)
    client.get("/api/session", headers={"X-Session-Id": "a"})
    client.get("/api/session", headers={"X-Session-Id": "b"})
    client.get("/api/session", headers={"X-Session-Id": "a"})
    client.get("/api/session", headers={"X-Session-Id": "c"})
    assert list(main.sessions) == ["a", "c"]


def test_shutdown_closes_github_client(monkeypatch):
    class ClosingAdapter:
        closed = False

        async def aclose(self):
            self.closed = True

    adapter = ClosingAdapter()
    monkeypatch.setattr(main, "github", adapter)
    with TestClient(main.app):
        pass
    assert adapter.closed
