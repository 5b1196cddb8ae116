"""
authgate.auth.errors

Error taxonomy for the authentication engine.

Responsibilities:
- Define the four externally visible failure kinds (`UsernameAlreadyTaken`,
  `LoginFailed`, `TokenError`, `DatabaseError`) under one `AuthError` base.
- Keep the internal reason for a failure (`detail`) separate from the generic
  message that may cross the engine boundary.
- Define the internal invariant violation raised for corrupt stored hashes.
"""

from __future__ import annotations


class AuthError(Exception):
    """
    Base class for every failure a protocol call reports to its caller.

    `message` is safe to return on the wire. `detail` says which check failed
    and is meant for internal logs only.
    """

    message: str = "an unknown error has occurred"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(detail={self.detail!r})"


class UsernameAlreadyTaken(AuthError):
    """Registration collided with an existing account."""

    message = "a user with that name already exists"


class LoginFailed(AuthError):
    """Unknown username or wrong password; the two are deliberately indistinguishable."""

    message = "access denied"


class TokenError(AuthError):
    """Missing, malformed, forged, foreign-issuer or expired token."""

    message = "access denied"


class DatabaseError(AuthError):
    """The user store failed; the original exception is chained as `__cause__`."""


class CorruptHashError(RuntimeError):
    """
    A stored hash could not be parsed.

    Only the credential hasher produces stored hashes, so this signals a broken
    store or a broken deployment rather than a failed login attempt.
    """


# --- Module Notes -----------------------------------------------------------
# `str(err)` is always the generic message; the transport layer must never render
# `detail` or the chained cause into a response body.
