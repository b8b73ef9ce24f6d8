"""Tests for the Flask endpoints in :mod:`app`.

``app.fetch_weather`` is monkey-patched so no request leaves the process.
"""

from functools import partial

import pytest

import app as weather_app
from snapshot import WeatherSnapshot
from weather_client import TransportError, UpstreamHTTPError, fetch_weather


@pytest.fixture
def client():
    weather_app.app.config.update(TESTING=True, WEATHER_API_KEY="test-key")
    return weather_app.app.test_client()


@pytest.fixture
def calls(monkeypatch):
    recorded = []
    monkeypatch.setattr(weather_app, "fetch_weather", lambda *a, **kw: recorded.append((a, kw)))
    return recorded


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Get Weather" in resp.data
    assert b"rain-nature.gif" in resp.data


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


@pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": "   "}, {"query": 42}, None])
def test_blank_query_never_calls_upstream(client, calls, body):
    resp = client.post("/api/get_weather", json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Location query is missing."}
    assert calls == []


def test_success(client, monkeypatch, payload):
    seen = []

    def fake_fetch(location, api_key, url=None):
        seen.append((location, api_key))
        return WeatherSnapshot.from_payload(payload)

    monkeypatch.setattr(weather_app, "fetch_weather", fake_fetch)
    resp = client.post("/api/get_weather", json={"query": " London "})

    assert resp.status_code == 200
    data = resp.get_json()
    assert seen == [("London", "test-key")]
    assert data["location_label"] == "London, United Kingdom"
    assert data["background_key"] == "Partly cloudy"
    assert data["air_quality"]["pm2_5"] == "4.60"


def test_upstream_error_message(client, monkeypatch):
    def fake_fetch(location, api_key, url=None):
        raise UpstreamHTTPError(401, "Invalid API key")

    monkeypatch.setattr(weather_app, "fetch_weather", fake_fetch)
    resp = client.post("/api/get_weather", json={"query": "London"})
    assert resp.status_code == 502
    assert resp.get_json() == {"error": "Invalid API key"}


def test_transport_error_message(client, monkeypatch):
    def fake_fetch(location, api_key, url=None):
        raise TransportError("Connection refused")

    monkeypatch.setattr(weather_app, "fetch_weather", fake_fetch)
    resp = client.post("/api/get_weather", json={"query": "London"})
    assert resp.status_code == 502
    assert resp.get_json() == {"error": "Connection refused"}


def test_missing_key(client):
    weather_app.app.config["WEATHER_API_KEY"] = ""
    resp = client.post("/api/get_weather", json={"query": "London"})
    assert resp.status_code == 500
    assert "WEATHER_API_KEY" in resp.get_json()["error"]


def test_unencodable_query_returns_json_error(client, monkeypatch, fake_session):
    monkeypatch.setattr(weather_app, "fetch_weather", partial(fetch_weather, session=fake_session()))
    resp = client.post(
        "/api/get_weather",
        data='{"query": "Lon\\ud800don"}',
        content_type="application/json",
    )
    assert resp.status_code == 502
    assert "surrogates not allowed" in resp.get_json()["error"]
