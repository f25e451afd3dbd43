"""Thin client for the two Spotify hosts the proxy talks to.

``SpotifyClient.exchange`` turns a grant into tokens at the accounts service,
``SpotifyClient.fetch`` issues a bearer-authenticated GET against the Web API.
Neither retries nor caches anything: each call is exactly one HTTP request.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests

from .errors import ProviderError

SPOTIFY_ACCOUNTS_BASE = "https://accounts.spotify.com"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"
TOKEN_URL = f"{SPOTIFY_ACCOUNTS_BASE}/api/token"
AUTHORIZE_URL = f"{SPOTIFY_ACCOUNTS_BASE}/authorize"

SCOPES = ("user-top-read", "user-read-recently-played")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationCodeGrant:
    code: str
    redirect_uri: str

    grant_type = "authorization_code"

    def form(self) -> dict[str, str]:
        return {"grant_type": self.grant_type, "code": self.code, "redirect_uri": self.redirect_uri}


@dataclass(frozen=True)
class RefreshTokenGrant:
    refresh_token: str

    grant_type = "refresh_token"

    def form(self) -> dict[str, str]:
        return {"grant_type": self.grant_type, "refresh_token": self.refresh_token}


@dataclass(frozen=True)
class TokenResult:
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None


def build_authorize_url(client_id: str, redirect_uri: str) -> str:
    """URL of the Spotify consent screen for the fixed read scopes."""
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": " ".join(SCOPES),
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


class SpotifyClient:
    def __init__(self, credentials, session=None):
        self._credentials = credentials
        # a session passed in belongs to the caller and is never closed here
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _basic_auth(self) -> str:
        raw = f"{self._credentials.client_id}:{self._credentials.client_secret}"
        return "Basic " + base64.b64encode(raw.encode()).decode()

    def exchange(self, grant) -> TokenResult:
        """POST ``grant`` to the token endpoint and parse the tokens out of the reply."""
        response = self._session.post(
            TOKEN_URL,
            data=grant.form(),
            headers={
                "Authorization": self._basic_auth(),
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )
        if not response.ok:
            logger.warning("Token request (%s) failed with status %s", grant.grant_type, response.status_code)
            raise ProviderError(
                f"Spotify token request failed ({response.status_code}): {response.text}",
                status=response.status_code,
                body=response.text,
            )

        payload = response.json()
        access_token = payload.get("access_token")
        if not access_token:
            raise ProviderError(
                f"Spotify token response had no access_token ({response.status_code}): {response.text}",
                status=response.status_code,
                body=response.text,
            )
        return TokenResult(
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
        )

    def fetch(self, path: str, access_token: str, params=None) -> dict:
        """GET ``path`` below the Web API base and return the decoded JSON body."""
        response = self._session.get(
            f"{SPOTIFY_API_BASE}{path}",
            params=params,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if not response.ok:
            logger.warning("GET %s failed with status %s", path, response.status_code)
            raise ProviderError(
                f"Spotify API request failed ({response.status_code}): {response.text}",
                status=response.status_code,
                body=response.text,
            )
        return response.json()
