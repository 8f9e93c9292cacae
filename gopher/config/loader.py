"""Assemble the runtime configuration from environment variables."""
from __future__ import annotations

import threading

import structlog
from pydantic import SecretStr

from gopher.cache.connection import RedisEndpoint, parse_port_number, resolve_redis_url
from gopher.config.env import EnvironmentSource, ProcessEnvironment, lookup
from gopher.config.errors import ConnectionStringError, InvalidConfigError
from gopher.config.levels import parse_log_level
from gopher.config.settings import (
    HerokuMetadata,
    RedisSettings,
    RuntimeConfig,
    SlackSettings,
    parse_environment,
)

logger = structlog.get_logger(__name__)

DEFAULT_LOG_LEVEL = "info"

# Read into the config, then removed from the environment so that subprocesses
# and crash dumps do not see them.
SCRUBBED_VARIABLES = (
    "GOPHER_SLACK_CLIENT_SECRET",
    "GOPHER_SLACK_REQUEST_SECRET",
    "GOPHER_SLACK_BOT_ACCESS_TOKEN",
)

_LOAD_LOCK = threading.Lock()


def _parse_port(value: str) -> int:
    try:
        port = parse_port_number(value)
    except ValueError as exc:
        raise InvalidConfigError("PORT", str(exc)) from exc
    if port > 65535:
        raise InvalidConfigError("PORT", f"value {value!r} out of range")
    return port


def _flag(env: EnvironmentSource, name: str) -> bool:
    return lookup(env, name) == "1"


def _load_redis(env: EnvironmentSource) -> RedisSettings:
    raw = lookup(env, "REDIS_URL")
    if not raw:
        return RedisSettings()

    insecure = _flag(env, "GOPHER_REDIS_INSECURE")
    skip_verify = _flag(env, "GOPHER_REDIS_SKIPVERIFY")
    try:
        endpoint: RedisEndpoint = resolve_redis_url(raw, insecure=insecure)
    except ConnectionStringError as exc:
        raise InvalidConfigError("REDIS_URL", str(exc)) from exc

    return RedisSettings(endpoint=endpoint, insecure=insecure, skip_verify=skip_verify)


def _scrub(env: EnvironmentSource) -> None:
    for name in SCRUBBED_VARIABLES:
        try:
            env.unset(name)
        except Exception as exc:
            # best-effort
            logger.warning(
                "failed to scrub environment variable",
                variable=name,
                error=repr(exc),
            )


def load_config(env: EnvironmentSource | None = None) -> RuntimeConfig:
    """Build the RuntimeConfig, raising ConfigError on the first bad field.

    Defaults to the process environment. The Slack secrets are unset from
    ``env`` once everything has been read.
    """
    source = env if env is not None else ProcessEnvironment()

    with _LOAD_LOCK:
        port_value = lookup(source, "PORT")
        port = _parse_port(port_value) if port_value else 0

        redis = _load_redis(source)

        level_name = lookup(source, "GOPHER_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        try:
            log_level = parse_log_level(level_name)
        except ValueError as exc:
            raise InvalidConfigError("LOG_LEVEL", str(exc)) from exc

        heroku = HerokuMetadata(
            app_id=lookup(source, "HEROKU_APP_ID"),
            app_name=lookup(source, "HEROKU_APP_NAME"),
            dyno_id=lookup(source, "HEROKU_DYNO_ID"),
            commit=lookup(source, "HEROKU_SLUG_COMMIT"),
        )

        slack = SlackSettings(
            app_id=lookup(source, "GOPHER_SLACK_APP_ID"),
            team_id=lookup(source, "GOPHER_SLACK_TEAM_ID"),
            client_id=lookup(source, "GOPHER_SLACK_CLIENT_ID"),
            request_token=lookup(source, "GOPHER_SLACK_REQUEST_TOKEN"),
            client_secret=SecretStr(lookup(source, "GOPHER_SLACK_CLIENT_SECRET")),
            request_secret=SecretStr(lookup(source, "GOPHER_SLACK_REQUEST_SECRET")),
            bot_access_token=SecretStr(lookup(source, "GOPHER_SLACK_BOT_ACCESS_TOKEN")),
        )

        config = RuntimeConfig(
            log_level=log_level,
            env=parse_environment(source.get("ENV")),
            port=port,
            heroku=heroku,
            redis=redis,
            slack=slack,
        )

        _scrub(source)

    return config
