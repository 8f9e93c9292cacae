"""Typed, immutable runtime configuration."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from gopher.cache.connection import RedisEndpoint
from gopher.config.levels import LogLevel


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


def parse_environment(value: str | None) -> Environment:
    """Map ENV to an Environment. Anything unrecognised is development."""
    normalized = (value or "").lower()
    if normalized in {"production", "staging", "testing"}:
        return Environment(normalized)
    return Environment.DEVELOPMENT


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RedisSettings(_Frozen):
    endpoint: RedisEndpoint = RedisEndpoint()
    # Plaintext connection, no secure-port offset.
    insecure: bool = False
    # Skip x.509 verification; Heroku Redis presents an untrusted cert.
    skip_verify: bool = False


class HerokuMetadata(_Frozen):
    """Heroku Labs dyno metadata."""

    app_id: str = ""
    app_name: str = ""
    dyno_id: str = ""
    commit: str = ""


class SlackSettings(_Frozen):
    app_id: str = ""
    team_id: str = ""
    client_id: str = ""
    request_token: str = ""
    client_secret: SecretStr = SecretStr("")
    # HMAC signing secret for Slack request signing.
    request_secret: SecretStr = SecretStr("")
    bot_access_token: SecretStr = SecretStr("")


class RuntimeConfig(_Frozen):
    log_level: LogLevel = LogLevel.INFO
    env: Environment = Environment.DEVELOPMENT
    # 0 leaves the choice to the platform.
    port: int = Field(default=0, ge=0, le=65535)
    heroku: HerokuMetadata = HerokuMetadata()
    redis: RedisSettings = RedisSettings()
    slack: SlackSettings = SlackSettings()
