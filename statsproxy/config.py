"""Environment-backed settings for the proxy."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError, MissingConfigurationError

DEFAULT_PORT = 3000

BASE_ENV_VARS = ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI")


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class Settings:
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    refresh_token: str | None = None
    port: int = DEFAULT_PORT
    use_https: bool = False
    ssl_key_path: str | None = None
    ssl_cert_path: str | None = None
    log_level: str = "INFO"

    @property
    def credentials(self) -> Credentials:
        return Credentials(client_id=self.client_id or "", client_secret=self.client_secret or "")

    def _spotify_values(self) -> dict[str, str | None]:
        return {
            "SPOTIFY_CLIENT_ID": self.client_id,
            "SPOTIFY_CLIENT_SECRET": self.client_secret,
            "SPOTIFY_REDIRECT_URI": self.redirect_uri,
            "SPOTIFY_REFRESH_TOKEN": self.refresh_token,
        }

    def missing_base_vars(self) -> list[str]:
        """Names of the base Spotify variables that are not set."""
        values = self._spotify_values()
        return [name for name in BASE_ENV_VARS if not values[name]]

    def require(self, *names: str) -> None:
        """Raise ``MissingConfigurationError`` if any named variable is unset."""
        values = self._spotify_values()
        missing = [name for name in names if not values[name]]
        if missing:
            raise MissingConfigurationError(missing)

    def ssl_files(self) -> tuple[str, str]:
        """Return absolute ``(cert, key)`` paths, as Flask's ``ssl_context`` wants them.

        Only meaningful when ``use_https`` is set; a missing path is fatal.
        """
        if not self.ssl_key_path or not self.ssl_cert_path:
            raise ConfigurationError("USE_HTTPS=true requires SSL_KEY_PATH and SSL_CERT_PATH.")
        return os.path.abspath(self.ssl_cert_path), os.path.abspath(self.ssl_key_path)


def _get(name):
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_port(raw):
    if raw is None:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None


def _spotify_fields():
    return {
        "client_id": _get("SPOTIFY_CLIENT_ID"),
        "client_secret": _get("SPOTIFY_CLIENT_SECRET"),
        "redirect_uri": _get("SPOTIFY_REDIRECT_URI"),
        "refresh_token": _get("SPOTIFY_REFRESH_TOKEN"),
    }


def load_spotify_settings(*, dotenv: bool = True) -> Settings:
    """Read only the Spotify variables; server-only values keep their defaults."""
    if dotenv:
        load_dotenv()
    return Settings(**_spotify_fields())


def load_settings(*, dotenv: bool = True) -> Settings:
    """Read settings from the environment, after loading ``.env`` if present."""
    if dotenv:
        load_dotenv()

    log_level = (_get("LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL {log_level!r}")

    return Settings(
        **_spotify_fields(),
        port=_parse_port(_get("PORT")),
        use_https=(_get("USE_HTTPS") or "").lower() == "true",
        ssl_key_path=_get("SSL_KEY_PATH"),
        ssl_cert_path=_get("SSL_CERT_PATH"),
        log_level=log_level,
    )
