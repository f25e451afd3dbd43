"""Listening summary: one token refresh, two parallel reads, one reshape."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests

from .errors import AggregationError, MissingConfigurationError, ProviderError
from .spotify import RefreshTokenGrant

TOP_ARTISTS_PATH = "/me/top/artists"
TOP_ARTISTS_PARAMS = {"time_range": "short_term", "limit": 3}
RECENTLY_PLAYED_PATH = "/me/player/recently-played"
RECENTLY_PLAYED_PARAMS = {"limit": 1}

TOP_ARTIST_COUNT = 3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtistSummary:
    name: str
    url: str

    def to_dict(self):
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class TrackSummary:
    track: str
    artist: str
    url: str
    played_at: str | None

    def to_dict(self):
        return {"track": self.track, "artist": self.artist, "url": self.url, "playedAt": self.played_at}


@dataclass(frozen=True)
class StatsResponse:
    top_artists: tuple[ArtistSummary, ...]
    last_played: TrackSummary | None

    def to_dict(self):
        return {
            "topArtists": [artist.to_dict() for artist in self.top_artists],
            "lastPlayed": self.last_played.to_dict() if self.last_played else None,
        }


def _spotify_url(item) -> str:
    return (item.get("external_urls") or {}).get("spotify") or ""


def map_top_artists(payload) -> tuple[ArtistSummary, ...]:
    """Project up to three artists, keeping Spotify's order."""
    items = (payload or {}).get("items") or []
    return tuple(
        ArtistSummary(name=artist.get("name") or "", url=_spotify_url(artist))
        for artist in items[:TOP_ARTIST_COUNT]
    )


def map_last_played(payload) -> TrackSummary | None:
    """Project the newest play, or ``None`` when there is no play history."""
    items = (payload or {}).get("items") or []
    if not items:
        return None
    item = items[0]
    track = item.get("track")
    if not track:
        return None
    return TrackSummary(
        track=track.get("name") or "",
        artist=", ".join(artist.get("name") or "" for artist in track.get("artists") or []),
        url=_spotify_url(track),
        played_at=item.get("played_at") or None,
    )


class StatsAggregator:
    def __init__(self, client):
        self._client = client

    def get_stats(self, refresh_token: str) -> StatsResponse:
        """Build the summary or raise ``AggregationError``; never returns partial data."""
        try:
            token = self._client.exchange(RefreshTokenGrant(refresh_token))
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="spotify-fetch") as executor:
                top_future = executor.submit(
                    self._client.fetch, TOP_ARTISTS_PATH, token.access_token, TOP_ARTISTS_PARAMS
                )
                recent_future = executor.submit(
                    self._client.fetch, RECENTLY_PLAYED_PATH, token.access_token, RECENTLY_PLAYED_PARAMS
                )
                top_payload = top_future.result()
                recent_payload = recent_future.result()
        except (ProviderError, requests.RequestException) as exc:
            raise AggregationError(str(exc)) from exc

        return StatsResponse(
            top_artists=map_top_artists(top_payload),
            last_played=map_last_played(recent_payload),
        )


def build_stats_response(settings, client) -> tuple[dict, int]:
    """JSON body and status for a stats request; shared by both entry points."""
    try:
        settings.require("SPOTIFY_REFRESH_TOKEN")
    except MissingConfigurationError:
        return {"error": "Spotify refresh token not configured. Complete /auth/login first."}, 503
    try:
        settings.require("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET")
    except MissingConfigurationError as exc:
        return {"error": str(exc)}, 503

    try:
        stats = StatsAggregator(client).get_stats(settings.refresh_token)
    except AggregationError as exc:
        logger.error("Failed to load Spotify stats: %s", exc)
        return {"error": "Failed to load Spotify stats.", "detail": str(exc)}, 500
    return stats.to_dict(), 200
