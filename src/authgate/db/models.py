"""
authgate.db.models

Persistence schema for user credentials.

Responsibilities:
- Define the `users` table: one row per username, holding the engine-assigned
  user id and the hashed password.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from authgate.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class UserAccount(Base):
    __tablename__ = "users"

    # Assigned by the engine (uuid4 string), never by the database.
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Unique constraint is what makes create-if-absent atomic across sessions.
    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(512), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def __repr__(self) -> str:
        return f"UserAccount(id={self.id!r}, username={self.username!r})"
