"""
sakhi_api.api.routers.users

User profile endpoints.

Responsibilities:
- Return the caller's own profile.
- Read/update a profile by id under the ownership policy (admins may act on anyone).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.api.deps import db_session
from sakhi_api.api.models import ApiModel
from sakhi_api.api.routers.auth import UserResponse
from sakhi_api.auth.deps import get_identity
from sakhi_api.auth.models import Identity
from sakhi_api.auth.policy import authorize_existing
from sakhi_api.db.repositories.users import UserRepo
from sakhi_api.errors import NotFound

router = APIRouter(prefix="/api/users", tags=["users"])


class ProfileUpdateRequest(ApiModel):
    # Only the display name is editable; role and email are not part of this surface.
    name: str | None = Field(default=None, max_length=256)


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    user = await UserRepo(session).get(identity.user_id)
    if user is None:
        # Credential outlived its account.
        raise NotFound("User not found")
    return UserResponse.model_validate(user)


@router.get("/profile/{user_id}", response_model=UserResponse)
async def get_profile(
    user_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    user = authorize_existing(
        identity, await UserRepo(session).get(user_id), not_found="User not found"
    )
    return UserResponse.model_validate(user)


@router.put("/profile/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: str,
    body: ProfileUpdateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    users = UserRepo(session)
    user = authorize_existing(identity, await users.get(user_id), not_found="User not found")
    changes = body.model_dump(exclude_unset=True)
    if "name" in changes:
        await users.set_name(user, changes["name"])
    await session.commit()
    return UserResponse.model_validate(user)
