"""Unit tests for Redis client options (hermetic, no live Redis required)."""
from __future__ import annotations

from typing import Any

import pytest
import redis

from gopher.cache.redis_client import (
    create_redis_client,
    redis_connection_kwargs,
    redis_connection_pool,
)
from gopher.config.env import MappingEnvironment
from gopher.config.errors import InvalidConfigError
from gopher.config.loader import load_config


class _RecordingFactory:
    def __init__(self) -> None:
        self.kwargs: dict[str, Any] | None = None

    def __call__(self, **kwargs: Any) -> str:
        self.kwargs = kwargs
        return "client"


def _config(**values: str):
    return load_config(MappingEnvironment(values))


def test_secure_endpoint_enables_tls_with_verification() -> None:
    kwargs = redis_connection_kwargs(_config(REDIS_URL="redis://h:pw@cache.internal:6379"))

    assert kwargs["host"] == "cache.internal"
    assert kwargs["port"] == 6380
    assert "username" not in kwargs
    assert kwargs["password"] == "pw"
    assert kwargs["ssl"] is True
    assert kwargs["ssl_cert_reqs"] == "required"
    assert kwargs["socket_connect_timeout"] == 2
    assert kwargs["socket_timeout"] == 2
    assert kwargs["max_connections"] == 20


def test_skip_verify_disables_certificate_checks() -> None:
    kwargs = redis_connection_kwargs(
        _config(REDIS_URL="rediss://cache.internal:6380", GOPHER_REDIS_SKIPVERIFY="1")
    )
    assert kwargs["ssl"] is True
    assert kwargs["ssl_cert_reqs"] == "none"


def test_insecure_endpoint_has_no_tls() -> None:
    kwargs = redis_connection_kwargs(
        _config(
            REDIS_URL="redis://localhost:6379",
            GOPHER_REDIS_INSECURE="1",
            GOPHER_REDIS_SKIPVERIFY="1",
        )
    )
    assert kwargs["port"] == 6379
    assert "ssl" not in kwargs
    assert "ssl_cert_reqs" not in kwargs


def test_empty_credentials_become_none() -> None:
    kwargs = redis_connection_kwargs(_config(REDIS_URL="redis://localhost"))
    assert "username" not in kwargs
    assert kwargs["password"] is None


def test_create_redis_client_uses_injected_factory() -> None:
    factory = _RecordingFactory()

    client = create_redis_client(_config(REDIS_URL="redis://localhost:6379"), redis_factory=factory)

    assert client == "client"
    assert factory.kwargs is not None
    assert factory.kwargs["port"] == 6380


def test_create_redis_client_defaults_to_redis_py_without_connecting() -> None:
    client = create_redis_client(
        _config(REDIS_URL="redis://127.0.0.1:1", GOPHER_REDIS_INSECURE="1")
    )
    assert isinstance(client, redis.Redis)


def test_create_redis_client_requires_redis_url() -> None:
    with pytest.raises(InvalidConfigError) as excinfo:
        create_redis_client(_config())
    assert excinfo.value.field == "REDIS_URL"


def test_heroku_placeholder_user_is_not_sent() -> None:
    kwargs = redis_connection_kwargs(_config(REDIS_URL="redis://h:pw@ec2.example.com:17079"))
    assert "username" not in kwargs
    assert kwargs["password"] == "pw"


def test_default_client_uses_blocking_pool_with_timeout() -> None:
    client = create_redis_client(_config(REDIS_URL="redis://h:pw@cache.internal:6379"))
    pool = client.connection_pool

    assert isinstance(pool, redis.BlockingConnectionPool)
    assert pool.timeout == 2
    assert pool.max_connections == 20
    assert pool.connection_class is redis.SSLConnection
    assert pool.connection_kwargs["port"] == 6380
    assert pool.connection_kwargs["ssl_cert_reqs"] == "required"


def test_insecure_pool_uses_plain_connections() -> None:
    pool = redis_connection_pool(
        _config(REDIS_URL="redis://localhost:6379", GOPHER_REDIS_INSECURE="1")
    )
    assert pool.connection_class is redis.Connection
    assert "ssl" not in pool.connection_kwargs
    assert pool.connection_kwargs["port"] == 6379
