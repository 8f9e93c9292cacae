"""Environment variable sources used by the config loader."""
from __future__ import annotations

import os
from typing import MutableMapping, Protocol


class EnvironmentSource(Protocol):
    def get(self, name: str) -> str | None: ...

    def unset(self, name: str) -> None: ...


class ProcessEnvironment:
    """Reads from and scrubs the real process environment."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def unset(self, name: str) -> None:
        # os.environ.pop calls unsetenv, which can raise OSError
        os.environ.pop(name, None)


class MappingEnvironment:
    """Dict-backed source for tests and embedding callers."""

    def __init__(self, values: MutableMapping[str, str] | None = None) -> None:
        self.values: MutableMapping[str, str] = dict(values or {})

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def unset(self, name: str) -> None:
        self.values.pop(name, None)


def lookup(env: EnvironmentSource, name: str) -> str:
    """Return the variable's value, with unset and empty both mapping to ""."""
    value = env.get(name)
    return value if value else ""
