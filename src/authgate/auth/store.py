"""
authgate.auth.store

The user store capability consumed by the engine.

Responsibilities:
- Define the two operations any backing store must provide.
- Define the not-found signal that the engine distinguishes from backend failures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from authgate.auth.types import HashedPassword, UserID, Username, UserRecord


class UserNotFound(LookupError):
    """Raised by `UserStore.retrieve` when no account has the requested username."""

    def __init__(self, username: Username) -> None:
        self.username = username
        super().__init__("user not found")


class UserStore(ABC):
    """
    Persistence contract for user credentials.

    Implementations must make `create_if_absent` atomic per username: when two
    calls race on one username, exactly one record is written and both calls
    return its id. Any exception other than `UserNotFound` is treated by the
    engine as an opaque backend failure and is never retried.

    Example implementation:
        class RedisUserStore(UserStore):
            async def create_if_absent(self, user_id, username, password_hash):
                created = await self._redis.hsetnx("users", username, ...)
                ...
    """

    @abstractmethod
    async def create_if_absent(
        self,
        user_id: UserID,
        username: Username,
        password_hash: HashedPassword,
    ) -> UserID:
        """
        Persist a new user unless `username` is already taken.

        Returns
        -------
        `user_id` unchanged if the record was created, otherwise the id already
        stored for `username` (and nothing is modified).
        """

    @abstractmethod
    async def retrieve(self, username: Username) -> UserRecord:
        """
        Look up a user by exact (case-sensitive) username.

        Raises
        ------
        UserNotFound
            If no user has that username.
        """
