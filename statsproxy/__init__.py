"""Proxy exposing a Spotify listening summary behind a stored refresh token."""

from .config import Credentials, Settings, load_settings, load_spotify_settings
from .errors import (
    AggregationError,
    ClientInputError,
    ConfigurationError,
    ConsentError,
    MissingConfigurationError,
    ProviderError,
    StatsProxyError,
)
from .spotify import AuthorizationCodeGrant, RefreshTokenGrant, SpotifyClient, TokenResult
from .stats import ArtistSummary, StatsAggregator, StatsResponse, TrackSummary

__all__ = [
    "AggregationError",
    "ArtistSummary",
    "AuthorizationCodeGrant",
    "ClientInputError",
    "ConfigurationError",
    "ConsentError",
    "Credentials",
    "MissingConfigurationError",
    "ProviderError",
    "RefreshTokenGrant",
    "Settings",
    "SpotifyClient",
    "StatsAggregator",
    "StatsProxyError",
    "StatsResponse",
    "TokenResult",
    "TrackSummary",
    "load_settings",
    "load_spotify_settings",
]
