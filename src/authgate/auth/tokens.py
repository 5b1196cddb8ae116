"""
authgate.auth.tokens

Signed session-token issuance and validation.

Responsibilities:
- Issue HS256 JWTs carrying subject, issuer and expiration claims.
- Validate signature, required claims, issuer and expiry against a clock that
  can be substituted in tests.
- Collapse every validation failure into a single `TokenError`.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import jwt

from authgate.auth.errors import TokenError
from authgate.auth.types import Claims, UserID

Clock = Callable[[], float]


class TokenService:
    """
    Examples
    --------
    >>> service = TokenService(secret="s" * 32, issuer="example", lifetime=timedelta(hours=1))
    >>> claims = service.validate(service.issue(UserID("42")))
    >>> claims.subject
    '42'
    """

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "iss", "exp")

    def __init__(
        self,
        secret: str,
        issuer: str,
        lifetime: timedelta,
        *,
        clock: Clock = time.time,
    ) -> None:
        if not secret:
            msg = "token secret cannot be empty"
            raise ValueError(msg)
        if not issuer:
            msg = "token issuer cannot be empty"
            raise ValueError(msg)

        self._secret = secret
        self._issuer = issuer
        self._lifetime = lifetime
        self._clock = clock

    @property
    def issuer(self) -> str:
        return self._issuer

    def issue(self, user_id: UserID) -> str:
        claims = Claims(
            subject=user_id,
            issuer=self._issuer,
            expiration=int(self._clock() + self._lifetime.total_seconds()),
        )
        payload: dict[str, Any] = {
            "sub": claims.subject,
            "iss": claims.issuer,
            "exp": claims.expiration,
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def validate(self, token: str) -> Claims:
        """
        Decode `token` and return its claims.

        Raises
        ------
        TokenError
            For any malformed, forged, foreign or expired token. `detail` names
            the failed check for logging; callers must not branch on it.
        """
        try:
            # Expiry is checked below against the injected clock, not PyJWT's own.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={
                    "require": list(self.REQUIRED_CLAIMS),
                    "verify_exp": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise TokenError("bad_signature") from e
        except jwt.InvalidIssuerError as e:
            raise TokenError("issuer_mismatch") from e
        except jwt.MissingRequiredClaimError as e:
            raise TokenError(f"missing_claim:{e.claim}") from e
        except jwt.InvalidTokenError as e:
            raise TokenError("malformed") from e

        claims = self._claims_from_payload(payload)
        if claims.is_expired(self._clock()):
            raise TokenError("expired")
        return claims

    @staticmethod
    def _claims_from_payload(payload: dict[str, Any]) -> Claims:
        subject, issuer, expiration = payload["sub"], payload["iss"], payload["exp"]
        # bool is an int subclass; a boolean "exp" is not a timestamp.
        if not isinstance(expiration, int) or isinstance(expiration, bool):
            raise TokenError("malformed")
        if not isinstance(subject, str) or not subject:
            raise TokenError("malformed")
        return Claims(subject=UserID(subject), issuer=issuer, expiration=expiration)


# --- Module Notes -----------------------------------------------------------
# Signing is symmetric: the secret never leaves this engine instance, so tokens are
# only meaningful to the engine that issued them.
