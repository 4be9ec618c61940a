"""
Exception types shared across the trading engine.
"""

from typing import Optional


class TraderError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(TraderError):
    """Missing credentials or invalid configuration. Fatal at startup."""


class DataSourceError(TraderError):
    """A market-data request failed (network, HTTP status, bad payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(DataSourceError):
    """Rate-limit retries were exhausted for a request."""


class PersistenceError(TraderError):
    """The state store could not be read or written."""
