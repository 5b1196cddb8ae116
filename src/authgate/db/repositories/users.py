"""
authgate.db.repositories.users

SQLAlchemy implementation of the engine's `UserStore` capability.

Responsibilities:
- Insert a user unless the username exists, returning whichever id owns it.
- Look users up by exact username.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authgate.auth.store import UserNotFound, UserStore
from authgate.auth.types import HashedPassword, UserID, Username, UserRecord
from authgate.db.models import UserAccount
from authgate.observability.logging import get_logger

log = get_logger(__name__)


class SqlUserStore(UserStore):
    """
    Each call runs in its own session and transaction, so one store instance can
    be shared by every concurrent request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_if_absent(
        self,
        user_id: UserID,
        username: Username,
        password_hash: HashedPassword,
    ) -> UserID:
        async with self._session_factory() as session:
            existing = await self._find(session, username)
            if existing is not None:
                return UserID(existing.id)

            session.add(UserAccount(id=user_id, username=username, password_hash=password_hash))
            try:
                await session.commit()
            except IntegrityError:
                # Lost a race with a concurrent insert of the same username.
                await session.rollback()
                existing = await self._find(session, username)
                if existing is None:
                    raise
                log.info("create_race_resolved", user_id=existing.id)
                return UserID(existing.id)
            return user_id

    async def retrieve(self, username: Username) -> UserRecord:
        async with self._session_factory() as session:
            account = await self._find(session, username)
        if account is None:
            raise UserNotFound(username)
        return UserRecord(
            user_id=UserID(account.id),
            password_hash=HashedPassword(account.password_hash),
        )

    @staticmethod
    async def _find(session: AsyncSession, username: Username) -> UserAccount | None:
        stmt = select(UserAccount).where(UserAccount.username == username)
        return (await session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Username comparison relies on the column's collation; SQLite and PostgreSQL compare
# case-sensitively by default, which is what the engine expects.
