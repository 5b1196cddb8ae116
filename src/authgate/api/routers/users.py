"""
authgate.api.routers.users

User-facing authentication endpoints.

Responsibilities:
- Register an account (`POST /users/register`).
- Exchange credentials for a session token (`POST /users/login`).
- Echo the authenticated caller (`GET /users/me`), the reference consumer of
  the `current_user` dependency.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from authgate.api.deps import authenticator_from_app, current_user
from authgate.auth import Authenticator, UserID

router = APIRouter(prefix="/users", tags=["users"])


class CredentialsRequest(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1, max_length=1024)

    def __repr__(self) -> str:
        return f"CredentialsRequest(username={self.username!r})"


class RegisterResponse(BaseModel):
    user_id: str


class LoginResponse(BaseModel):
    token: str


class WhoAmIResponse(BaseModel):
    user_id: str


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: CredentialsRequest,
    auth: Authenticator = Depends(authenticator_from_app),
) -> RegisterResponse:
    user_id = await auth.register(body.username, body.password)
    return RegisterResponse(user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: CredentialsRequest,
    auth: Authenticator = Depends(authenticator_from_app),
) -> LoginResponse:
    token = await auth.login(body.username, body.password)
    return LoginResponse(token=token)


@router.get("/me", response_model=WhoAmIResponse)
async def whoami(user_id: UserID = Depends(current_user)) -> WhoAmIResponse:
    return WhoAmIResponse(user_id=user_id)


# --- Module Notes -----------------------------------------------------------
# Engine errors are not caught here; `authgate.api.errors` turns them into responses.
