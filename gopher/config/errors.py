"""Configuration error hierarchy."""
from __future__ import annotations


class ConfigError(Exception):
    """Base error for configuration loading."""


class ConnectionStringError(ConfigError):
    """A Redis connection string could not be turned into an endpoint."""


class MalformedURLError(ConnectionStringError):
    """The connection string is not a parsable URL."""


class UnsupportedSchemeError(ConnectionStringError):
    """The connection string uses a scheme other than redis or rediss."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unknown scheme: {scheme}")
        self.scheme = scheme


class MalformedEndpointError(ConnectionStringError):
    """The host:port authority could not be split."""


class InvalidPortError(ConnectionStringError):
    """The port is not an integer or falls outside 1..65535."""


class InvalidConfigError(ConfigError):
    """A configuration field failed to parse."""

    def __init__(self, field: str, reason: str | None = None) -> None:
        message = f"failed to parse {field}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.field = field
