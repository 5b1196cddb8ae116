"""
authgate.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Build the `Authenticator` from settings and a store.
- Expose it, and the authenticated user id, as request dependencies.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from authgate.auth import AuthConfig, Authenticator, UserID, UserStore
from authgate.settings import Settings


def build_authenticator(settings: Settings, store: UserStore) -> Authenticator:
    return Authenticator(
        AuthConfig(
            password_salt=settings.password_salt,
            token_secret=settings.token_secret,
            token_issuer=settings.token_issuer,
            token_lifetime=settings.token_lifetime,
            store=store,
            hash_time_cost=settings.hash_time_cost,
            hash_memory_cost=settings.hash_memory_cost,
            hash_parallelism=settings.hash_parallelism,
        )
    )


def authenticator_from_app(request: Request) -> Authenticator:
    # Set by `authgate.api.app.create_app` (directly, or in the lifespan hook).
    return request.app.state.authenticator  # type: ignore[attr-defined]


def current_user(
    authorization: str | None = Header(default=None),
    auth: Authenticator = Depends(authenticator_from_app),
) -> UserID:
    # A missing header falls through to the engine and comes back as TokenError (403).
    return auth.verify_token(authorization)
