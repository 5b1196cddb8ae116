"""
authgate.auth.bearer

Parsing of `Authorization` header values.
"""

from __future__ import annotations

from authgate.auth.errors import TokenError

BEARER_PREFIX = "bearer "


def strip_bearer_prefix(header_value: str | None) -> str:
    # Scheme match is ASCII case-insensitive: "Bearer ", "BEARER " and "bearer " all pass.
    if not header_value or len(header_value) < len(BEARER_PREFIX):
        raise TokenError("missing_bearer_prefix")
    scheme, token = header_value[: len(BEARER_PREFIX)], header_value[len(BEARER_PREFIX) :]
    if scheme.lower() != BEARER_PREFIX:
        raise TokenError("missing_bearer_prefix")
    if not token:
        raise TokenError("empty_token")
    return token
