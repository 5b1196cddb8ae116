"""
authgate.auth.engine

The authentication orchestrator.

Responsibilities:
- Hold the immutable engine configuration (`AuthConfig`), including the store handle.
- Run the Register, Login and VerifyToken protocols on top of the credential
  hasher, the token service and the user store.
- Map detailed internal failures onto the coarse `AuthError` kinds at the
  protocol boundary, logging the detail without letting it cross.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

from authgate.auth.bearer import strip_bearer_prefix
from authgate.auth.errors import DatabaseError, LoginFailed, TokenError, UsernameAlreadyTaken
from authgate.auth.hasher import CredentialHasher
from authgate.auth.store import UserNotFound, UserStore
from authgate.auth.tokens import Clock, TokenService
from authgate.auth.types import UserID, Username, UserRecord
from authgate.observability.logging import get_logger

log = get_logger(__name__)


def _new_user_id() -> UserID:
    return UserID(str(uuid.uuid4()))


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """
    Engine parameters, fixed for the lifetime of an `Authenticator`.

    Changing `password_salt` invalidates every stored hash; changing
    `token_secret` invalidates every outstanding token.
    """

    password_salt: str = field(repr=False)
    token_secret: str = field(repr=False)
    token_issuer: str
    token_lifetime: timedelta
    store: UserStore
    # argon2id cost parameters
    hash_time_cost: int = 3
    hash_memory_cost: int = 65536
    hash_parallelism: int = 4


class Authenticator:
    """
    Stateless beyond its configuration: calls may run concurrently without
    coordination, and the store is the only shared mutable resource.

    Examples
    --------
    >>> auth = Authenticator(config)
    >>> user_id = await auth.register("sam", "foobar")
    >>> token = await auth.login("sam", "foobar")
    >>> auth.verify_token(f"Bearer {token}") == user_id
    True
    """

    def __init__(
        self,
        config: AuthConfig,
        *,
        clock: Clock = time.time,
        id_factory: Callable[[], UserID] = _new_user_id,
    ) -> None:
        self._config = config
        self._store = config.store
        self._hasher = CredentialHasher(
            config.password_salt,
            time_cost=config.hash_time_cost,
            memory_cost=config.hash_memory_cost,
            parallelism=config.hash_parallelism,
        )
        self._tokens = TokenService(
            config.token_secret,
            config.token_issuer,
            config.token_lifetime,
            clock=clock,
        )
        self._new_id = id_factory
        # Verified against on unknown usernames so both login failures cost one argon2 run.
        self._dummy_hash = self._hasher.hash(uuid.uuid4().hex)

    @property
    def config(self) -> AuthConfig:
        return self._config

    async def register(self, username: str, password: str) -> UserID:
        """
        Create an account and return its id.

        Raises
        ------
        UsernameAlreadyTaken
            If the store already holds `username`; no account is created.
        DatabaseError
            If the store fails.
        """
        candidate = self._new_id()
        # CPU-bound; runs off the event loop and outside any store lock.
        password_hash = await asyncio.to_thread(self._hasher.hash, password)

        try:
            user_id = await self._store.create_if_absent(
                candidate, Username(username), password_hash
            )
        except Exception as e:
            log.error("store_failure", operation="create_if_absent", error=type(e).__name__)
            raise DatabaseError("create_if_absent failed") from e

        if user_id != candidate:
            log.info("registration_conflict", username=username)
            raise UsernameAlreadyTaken("username exists")

        log.info("user_registered", user_id=user_id)
        return user_id

    async def login(self, username: str, password: str) -> str:
        """
        Check credentials and return a fresh session token.

        Raises
        ------
        LoginFailed
            If the username is unknown or the password is wrong.
        DatabaseError
            If the store fails.
        """
        record = await self._retrieve(Username(username))
        if record is None:
            await asyncio.to_thread(self._hasher.verify, password, self._dummy_hash)
            log.info("login_failed", username=username, reason="unknown_username")
            raise LoginFailed("unknown_username")

        if not await asyncio.to_thread(self._hasher.verify, password, record.password_hash):
            log.info("login_failed", username=username, reason="wrong_password")
            raise LoginFailed("wrong_password")

        token = self._tokens.issue(record.user_id)
        log.info("user_logged_in", user_id=record.user_id)
        return token

    def verify_token(self, authorization: str | None) -> UserID:
        """
        Resolve an `Authorization` header value (`Bearer <token>`) to a user id.

        Raises
        ------
        TokenError
            If the prefix is missing or the token does not validate.
        """
        try:
            token = strip_bearer_prefix(authorization)
            claims = self._tokens.validate(token)
        except TokenError as e:
            log.info("token_rejected", reason=e.detail)
            raise
        return claims.subject

    async def _retrieve(self, username: Username) -> UserRecord | None:
        try:
            return await self._store.retrieve(username)
        except UserNotFound:
            return None
        except Exception as e:
            log.error("store_failure", operation="retrieve", error=type(e).__name__)
            raise DatabaseError("retrieve failed") from e


# --- Module Notes -----------------------------------------------------------
# The engine never retries store calls and applies no timeouts of its own; both
# belong to the store implementation or the transport around it.
