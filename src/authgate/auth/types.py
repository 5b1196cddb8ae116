"""
authgate.auth.types

Identity and credential value types shared by the engine and its stores.

Responsibilities:
- Name the string identities the engine passes around (UserID, Username,
  HashedPassword) so signatures document which is which.
- Define the token payload (`Claims`) and the store lookup result (`UserRecord`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

UserID = NewType("UserID", str)
Username = NewType("Username", str)
HashedPassword = NewType("HashedPassword", str)


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Session token payload; built at issuance, rebuilt at validation, never stored.
    """

    subject: UserID
    issuer: str
    # Seconds since the epoch.
    expiration: int

    def is_expired(self, now: float) -> bool:
        return now >= self.expiration


@dataclass(frozen=True, slots=True)
class UserRecord:
    user_id: UserID
    # Hash material stays out of reprs (and so out of tracebacks and logs).
    password_hash: HashedPassword = field(repr=False)
