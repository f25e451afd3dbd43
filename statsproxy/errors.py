"""Error types raised by the stats proxy."""

from __future__ import annotations


class StatsProxyError(RuntimeError):
    """Base class for every error this package raises on purpose."""


class ConfigurationError(StatsProxyError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""

    def __init__(self, names):
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")


class ProviderError(StatsProxyError):
    """Spotify answered with a non-success status."""

    def __init__(self, message: str, *, status: int, body: str) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ClientInputError(StatsProxyError):
    """The OAuth callback was called with unusable query parameters."""


class ConsentError(StatsProxyError):
    """Authorization succeeded but Spotify granted no refresh token."""


class AggregationError(StatsProxyError):
    """Loading the stats summary failed; carries the underlying message."""
