"""
authgate.auth.hasher

Credential hashing and verification.

Responsibilities:
- Derive a self-describing argon2id hash from a plaintext password, mixing in
  the configured salt so hashes are bound to this deployment.
- Verify a plaintext password against a stored hash without early-exit comparison.
"""

from __future__ import annotations

import hashlib
import hmac

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from authgate.auth.errors import CorruptHashError
from authgate.auth.types import HashedPassword


class CredentialHasher:
    """
    argon2id over an HMAC-SHA256 of the password keyed by the configured salt.

    argon2 draws a fresh random salt per hash, so hashing the same password twice
    gives different strings; the configured salt acts as a deployment-wide pepper,
    so a hash written under one salt never verifies under another.

    Examples
    --------
    >>> hasher = CredentialHasher(salt="pepper", time_cost=1, memory_cost=8, parallelism=1)
    >>> stored = hasher.hash("hunter2")
    >>> hasher.verify("hunter2", stored)
    True
    """

    def __init__(
        self,
        salt: str,
        *,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        if not salt:
            msg = "password salt cannot be empty"
            raise ValueError(msg)

        self._salt = salt.encode("utf-8")
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, password: str) -> HashedPassword:
        return HashedPassword(self._hasher.hash(self._pepper(password)))

    def verify(self, password: str, password_hash: HashedPassword) -> bool:
        """
        Check `password` against a hash produced by `hash`.

        Raises
        ------
        CorruptHashError
            If `password_hash` is not a well-formed argon2 encoded string, including
            ones that parse but carry out-of-range parameters, salt or digest.
        """
        # Encoded hashes are pure ASCII; anything else never came from `hash`.
        if not password_hash.isascii():
            raise CorruptHashError("stored password hash is not a valid argon2 hash")
        try:
            return self._hasher.verify(password_hash, self._pepper(password))
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise CorruptHashError("stored password hash is not a valid argon2 hash") from e

    def _pepper(self, password: str) -> bytes:
        return hmac.new(self._salt, password.encode("utf-8"), hashlib.sha256).digest()
