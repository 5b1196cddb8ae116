"""
tests.conftest

Shared fixtures for the authgate test suite.

Responsibilities:
- Provide an in-memory `UserStore` (serialized by an asyncio lock) and a store
  whose backend is always down.
- Provide a controllable clock and a cheap-to-hash engine configuration.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import pytest

from authgate.auth import (
    AuthConfig,
    Authenticator,
    HashedPassword,
    UserID,
    Username,
    UserNotFound,
    UserRecord,
    UserStore,
)

SALT = "test-salt-do-not-use-in-prod"
SECRET = "test-secret-0123456789abcdef0123456789abcdef"
ISSUER = "authgate-tests"
START = 1_700_000_000.0

# argon2 minimums; production costs make the suite needlessly slow.
FAST_HASH: dict[str, int] = {"hash_time_cost": 1, "hash_memory_cost": 8, "hash_parallelism": 1}


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def create_if_absent(
        self,
        user_id: UserID,
        username: Username,
        password_hash: HashedPassword,
    ) -> UserID:
        async with self._lock:
            existing = self._users.get(username)
            if existing is not None:
                return existing.user_id
            self._users[username] = UserRecord(user_id=user_id, password_hash=password_hash)
            return user_id

    async def retrieve(self, username: Username) -> UserRecord:
        async with self._lock:
            record = self._users.get(username)
        if record is None:
            raise UserNotFound(username)
        return record

    def __len__(self) -> int:
        return len(self._users)


class UnavailableUserStore(UserStore):
    async def create_if_absent(
        self,
        user_id: UserID,
        username: Username,
        password_hash: HashedPassword,
    ) -> UserID:
        raise ConnectionError("connection refused")

    async def retrieve(self, username: Username) -> UserRecord:
        raise TimeoutError("backend timed out")


class FakeClock:
    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_config() -> Callable[..., AuthConfig]:
    def _make(store: UserStore, **overrides: Any) -> AuthConfig:
        params: dict[str, Any] = {
            "password_salt": SALT,
            "token_secret": SECRET,
            "token_issuer": ISSUER,
            "token_lifetime": timedelta(hours=1),
            "store": store,
            **FAST_HASH,
        }
        params.update(overrides)
        return AuthConfig(**params)

    return _make


@pytest.fixture
def authenticator(
    store: InMemoryUserStore,
    clock: FakeClock,
    make_config: Callable[..., AuthConfig],
) -> Authenticator:
    return Authenticator(make_config(store), clock=clock)


# --- Module Notes -----------------------------------------------------------
# Test modules import the store classes and constants directly from `tests.conftest`
# where a fixture would be awkward (e.g. building a second engine).
