"""Redis client options derived from the runtime configuration."""
from __future__ import annotations

from typing import Any, Callable

import redis

from gopher.config.errors import InvalidConfigError
from gopher.config.settings import RuntimeConfig

DIAL_TIMEOUT_SECONDS = 2
IO_TIMEOUT_SECONDS = 2
POOL_SIZE = 20
POOL_TIMEOUT_SECONDS = 2


def redis_connection_kwargs(config: RuntimeConfig) -> dict[str, Any]:
    """Keyword arguments for ``redis.Redis`` matching the configured endpoint.

    Only the password is sent. Heroku URLs carry a placeholder user (``h``)
    that does not exist as an ACL user on the server.
    """
    endpoint = config.redis.endpoint
    kwargs: dict[str, Any] = {
        "host": endpoint.host,
        "port": endpoint.port,
        "password": endpoint.password or None,
        "socket_connect_timeout": DIAL_TIMEOUT_SECONDS,
        "socket_timeout": IO_TIMEOUT_SECONDS,
        "max_connections": POOL_SIZE,
    }

    if not config.redis.insecure:
        kwargs["ssl"] = True
        kwargs["ssl_cert_reqs"] = "none" if config.redis.skip_verify else "required"

    return kwargs


def redis_connection_pool(config: RuntimeConfig) -> redis.BlockingConnectionPool:
    """Pool that waits up to POOL_TIMEOUT_SECONDS for a free connection."""
    kwargs = redis_connection_kwargs(config)
    max_connections = kwargs.pop("max_connections")
    connection_class = redis.SSLConnection if kwargs.pop("ssl", False) else redis.Connection

    return redis.BlockingConnectionPool(
        max_connections=max_connections,
        timeout=POOL_TIMEOUT_SECONDS,
        connection_class=connection_class,
        **kwargs,
    )


def create_redis_client(
    config: RuntimeConfig,
    redis_factory: Callable[..., Any] | None = None,
) -> Any:
    """Build a Redis client for the configured endpoint. Does not connect."""
    if not config.redis.endpoint.is_set:
        raise InvalidConfigError("REDIS_URL", "not set")

    if redis_factory is not None:
        return redis_factory(**redis_connection_kwargs(config))
    return redis.Redis(connection_pool=redis_connection_pool(config))
