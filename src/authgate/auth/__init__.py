"""
authgate.auth

The authentication engine.

Responsibilities:
- Credential hashing (`CredentialHasher`) and session tokens (`TokenService`).
- The user store capability the engine consumes (`UserStore`).
- The Register/Login/VerifyToken protocols (`Authenticator`) and their errors.

Usage:
    from authgate.auth import AuthConfig, Authenticator

    auth = Authenticator(AuthConfig(..., store=my_store))
    user_id = await auth.register("sam", "foobar")
"""

from authgate.auth.engine import AuthConfig, Authenticator
from authgate.auth.errors import (
    AuthError,
    CorruptHashError,
    DatabaseError,
    LoginFailed,
    TokenError,
    UsernameAlreadyTaken,
)
from authgate.auth.hasher import CredentialHasher
from authgate.auth.store import UserNotFound, UserStore
from authgate.auth.tokens import TokenService
from authgate.auth.types import Claims, HashedPassword, UserID, Username, UserRecord

__all__ = [
    # Engine
    "AuthConfig",
    "Authenticator",
    # Services
    "CredentialHasher",
    "TokenService",
    # Store capability
    "UserStore",
    "UserNotFound",
    # Types
    "Claims",
    "HashedPassword",
    "UserID",
    "Username",
    "UserRecord",
    # Errors
    "AuthError",
    "UsernameAlreadyTaken",
    "LoginFailed",
    "TokenError",
    "DatabaseError",
    "CorruptHashError",
]
