"""Shared fixtures: settings and canned Spotify payloads."""

from __future__ import annotations

import pytest

from fakes import RECENTLY_PLAYED_URL, TOP_ARTISTS_URL, FakeResponse, FakeSession
from statsproxy.config import Settings
from statsproxy.spotify import TOKEN_URL

ENV_VARS = (
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
    "SPOTIFY_REDIRECT_URI",
    "SPOTIFY_REFRESH_TOKEN",
    "PORT",
    "USE_HTTPS",
    "SSL_KEY_PATH",
    "SSL_CERT_PATH",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:3000/auth/callback",
        refresh_token="stored-refresh-token",
    )


@pytest.fixture
def top_artists_payload() -> dict[str, object]:
    return {
        "items": [
            {"name": "Artist One", "external_urls": {"spotify": "https://open.spotify.com/artist/1"}},
            {"name": "Artist Two", "external_urls": {"spotify": "https://open.spotify.com/artist/2"}},
            {"name": "Artist Three", "external_urls": {}},
            {"name": "Artist Four", "external_urls": {"spotify": "https://open.spotify.com/artist/4"}},
        ]
    }


@pytest.fixture
def recently_played_payload() -> dict[str, object]:
    return {
        "items": [
            {
                "track": {
                    "name": "T",
                    "artists": [{"name": "A"}, {"name": "B"}],
                    "external_urls": {"spotify": "u"},
                },
                "played_at": "2024-01-01T00:00:00Z",
            }
        ]
    }


@pytest.fixture
def happy_session(
    top_artists_payload: dict[str, object], recently_played_payload: dict[str, object]
) -> FakeSession:
    return FakeSession(
        {
            TOKEN_URL: FakeResponse(payload={"access_token": "access-123", "expires_in": 3600}),
            TOP_ARTISTS_URL: FakeResponse(payload=top_artists_payload),
            RECENTLY_PLAYED_URL: FakeResponse(payload=recently_played_payload),
        }
    )
