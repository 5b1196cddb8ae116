"""
tests.test_tokens

Unit tests for session-token issuance and validation.

Responsibilities:
- Check claims, expiry (with an injected clock) and issuer enforcement.
- Check that every kind of bad token surfaces as a single `TokenError`.
"""

from __future__ import annotations

import base64
import json
from datetime import timedelta

import jwt
import pytest

from authgate.auth import TokenError, TokenService, UserID

from tests.conftest import ISSUER, SECRET, START, FakeClock


def _service(clock: FakeClock, *, secret: str = SECRET, issuer: str = ISSUER) -> TokenService:
    return TokenService(secret, issuer, timedelta(hours=1), clock=clock)


def _b64url(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_issued_token_carries_subject_issuer_and_expiration(clock: FakeClock) -> None:
    service = _service(clock)
    token = service.issue(UserID("user-1"))

    assert token.count(".") == 2
    claims = service.validate(token)
    assert claims.subject == "user-1"
    assert claims.issuer == ISSUER
    assert claims.expiration == int(START + 3600)


def test_token_uses_standard_jwt_claims(clock: FakeClock) -> None:
    token = _service(clock).issue(UserID("user-1"))

    header = jwt.get_unverified_header(token)
    payload = jwt.decode(token, options={"verify_signature": False})
    assert header["alg"] == "HS256"
    assert payload == {"sub": "user-1", "iss": ISSUER, "exp": int(START + 3600)}


def test_token_valid_until_expiration_then_rejected(clock: FakeClock) -> None:
    service = _service(clock)
    token = service.issue(UserID("user-1"))

    clock.advance(3599)
    assert service.validate(token).subject == "user-1"

    # expiration is exclusive: now == exp is already too late
    clock.advance(1)
    with pytest.raises(TokenError) as excinfo:
        service.validate(token)
    assert excinfo.value.detail == "expired"


def test_zero_lifetime_token_is_never_valid(clock: FakeClock) -> None:
    service = TokenService(SECRET, ISSUER, timedelta(0), clock=clock)

    with pytest.raises(TokenError):
        service.validate(service.issue(UserID("user-1")))


def test_token_signed_with_other_secret_is_rejected(clock: FakeClock) -> None:
    foreign = _service(clock, secret="another-secret-0123456789abcdef0123456789")
    token = foreign.issue(UserID("user-1"))

    with pytest.raises(TokenError) as excinfo:
        _service(clock).validate(token)
    assert excinfo.value.detail == "bad_signature"


def test_token_from_other_issuer_is_rejected(clock: FakeClock) -> None:
    token = _service(clock, issuer="someone-else").issue(UserID("user-1"))

    with pytest.raises(TokenError) as excinfo:
        _service(clock).validate(token)
    assert excinfo.value.detail == "issuer_mismatch"


def test_tampered_payload_is_rejected(clock: FakeClock) -> None:
    service = _service(clock)
    header, _, signature = service.issue(UserID("user-1")).split(".")
    forged_payload = _b64url({"sub": "admin", "iss": ISSUER, "exp": int(START + 3600)})

    with pytest.raises(TokenError) as excinfo:
        service.validate(f"{header}.{forged_payload}.{signature}")
    assert excinfo.value.detail == "bad_signature"


def test_tampered_signature_is_rejected(clock: FakeClock) -> None:
    service = _service(clock)
    header, payload, signature = service.issue(UserID("user-1")).split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(TokenError):
        service.validate(f"{header}.{payload}.{flipped}")


def test_unsigned_token_is_rejected(clock: FakeClock) -> None:
    unsigned = jwt.encode(
        {"sub": "user-1", "iss": ISSUER, "exp": int(START + 3600)},
        key=None,
        algorithm="none",
    )

    with pytest.raises(TokenError):
        _service(clock).validate(unsigned)


def test_token_missing_expiration_is_rejected(clock: FakeClock) -> None:
    token = jwt.encode({"sub": "user-1", "iss": ISSUER}, SECRET, algorithm="HS256")

    with pytest.raises(TokenError) as excinfo:
        _service(clock).validate(token)
    assert excinfo.value.detail == "missing_claim:exp"


def test_non_integer_expiration_is_rejected(clock: FakeClock) -> None:
    token = jwt.encode(
        {"sub": "user-1", "iss": ISSUER, "exp": "tomorrow"}, SECRET, algorithm="HS256"
    )

    with pytest.raises(TokenError):
        _service(clock).validate(token)


@pytest.mark.parametrize("garbage", ["faketoken", "", "a.b.c", "...."])
def test_garbage_is_rejected_uniformly(clock: FakeClock, garbage: str) -> None:
    with pytest.raises(TokenError) as excinfo:
        _service(clock).validate(garbage)
    # every failure reports the same public message
    assert str(excinfo.value) == "access denied"


def test_empty_secret_or_issuer_is_rejected() -> None:
    with pytest.raises(ValueError, match="secret"):
        TokenService("", ISSUER, timedelta(hours=1))
    with pytest.raises(ValueError, match="issuer"):
        TokenService(SECRET, "", timedelta(hours=1))


def test_default_clock_is_wall_time() -> None:
    service = TokenService(SECRET, ISSUER, timedelta(minutes=5))

    assert service.validate(service.issue(UserID("user-1"))).subject == "user-1"
