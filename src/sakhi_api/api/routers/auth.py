"""
sakhi_api.api.routers.auth

Signup and login.

Responsibilities:
- Register users (always with role USER) and return a signed credential.
- Exchange email/password for a signed credential without revealing which part was wrong.
- Serve both under `/api/auth` and, for older clients, `/api/users`.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_201_CREATED

from sakhi_api.api.deps import db_session, settings_dep
from sakhi_api.api.models import ApiModel
from sakhi_api.auth.deps import token_codec
from sakhi_api.auth.jwt import TokenCodec
from sakhi_api.auth.models import Identity, Role
from sakhi_api.auth.password import hash_password, verify_password
from sakhi_api.db.models import User
from sakhi_api.db.repositories.users import UserRepo
from sakhi_api.errors import BadRequest
from sakhi_api.observability.logging import get_logger
from sakhi_api.settings import Settings

log = get_logger(__name__)

router = APIRouter(tags=["auth"])


class SignupRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str | None = Field(default=None, max_length=256)


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserResponse(ApiModel):
    id: str
    email: str
    name: str | None
    role: Role
    created_at: datetime


class AuthResponse(ApiModel):
    token: str
    user: UserResponse


def _issue(codec: TokenCodec, user: User) -> AuthResponse:
    token = codec.issue(Identity(user_id=user.id, role=user.role))
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/signup", response_model=AuthResponse, status_code=HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    codec: TokenCodec = Depends(token_codec),
) -> AuthResponse:
    users = UserRepo(session)
    email = str(body.email).lower()
    if await users.get_by_email(email) is not None:
        raise BadRequest("Email already in use")

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await run_in_threadpool(
        hash_password, body.password, rounds=settings.bcrypt_rounds
    )
    user = await users.create(email=email, password_hash=password_hash, name=body.name)
    await session.commit()
    log.info("user_signed_up", user_id=user.id)
    return _issue(codec, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    codec: TokenCodec = Depends(token_codec),
) -> AuthResponse:
    user = await UserRepo(session).get_by_email(str(body.email).lower())
    if user is None or not await run_in_threadpool(
        verify_password, body.password, user.password_hash
    ):
        log.info("login_failed")
        raise BadRequest("Invalid email or password")
    return _issue(codec, user)
