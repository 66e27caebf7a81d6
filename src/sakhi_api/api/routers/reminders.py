"""
sakhi_api.api.routers.reminders

Reminder endpoints (period, medication, appointment, custom).

Responsibilities:
- Create/list reminders for a user under the ownership policy.
- Update/delete by id: 404 when absent, then the ownership check on the stored owner.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from sakhi_api.api.deps import db_session
from sakhi_api.api.models import ApiModel, MessageResponse, NotNull, UtcDateTime
from sakhi_api.auth.deps import get_identity
from sakhi_api.auth.models import Identity
from sakhi_api.auth.policy import authorize_existing, enforce
from sakhi_api.db.models import ReminderType
from sakhi_api.db.repositories.reminders import ReminderRepo
from sakhi_api.db.repositories.users import UserRepo
from sakhi_api.errors import BadRequest, NotFound

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


class ReminderCreateRequest(ApiModel):
    user_id: str = Field(min_length=1, max_length=32)
    type: ReminderType
    title: str = Field(min_length=3, max_length=256)
    description: str | None = None
    remind_at: UtcDateTime


class ReminderUpdateRequest(ApiModel):
    type: Annotated[ReminderType | None, NotNull] = None
    title: Annotated[str | None, Field(min_length=3, max_length=256), NotNull] = None
    description: str | None = None
    remind_at: Annotated[UtcDateTime | None, NotNull] = None


class ReminderResponse(ApiModel):
    id: str
    user_id: str
    type: ReminderType
    title: str
    description: str | None
    remind_at: datetime
    created_at: datetime
    updated_at: datetime


@router.post("", response_model=ReminderResponse, status_code=HTTP_201_CREATED)
async def create_reminder(
    body: ReminderCreateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> ReminderResponse:
    enforce(identity, body.user_id)
    if not await UserRepo(session).exists(body.user_id):
        raise NotFound("User not found")

    reminder = await ReminderRepo(session).create(
        user_id=body.user_id,
        type=body.type,
        title=body.title,
        description=body.description,
        remind_at=body.remind_at,
    )
    await session.commit()
    return ReminderResponse.model_validate(reminder)


@router.get("/{user_id}", response_model=list[ReminderResponse])
async def list_reminders(
    user_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> list[ReminderResponse]:
    enforce(identity, user_id)
    reminders = await ReminderRepo(session).list_for_user(user_id)
    return [ReminderResponse.model_validate(r) for r in reminders]


@router.put("/{reminder_id}", response_model=ReminderResponse)
async def update_reminder(
    reminder_id: str,
    body: ReminderUpdateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> ReminderResponse:
    reminders = ReminderRepo(session)
    reminder = authorize_existing(
        identity, await reminders.get(reminder_id), not_found="Reminder not found"
    )

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise BadRequest("No fields to update")
    await reminders.update(reminder, changes)
    await session.commit()
    return ReminderResponse.model_validate(reminder)


@router.delete("/{reminder_id}", response_model=MessageResponse)
async def delete_reminder(
    reminder_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    reminders = ReminderRepo(session)
    reminder = authorize_existing(
        identity, await reminders.get(reminder_id), not_found="Reminder not found"
    )
    await reminders.delete(reminder)
    await session.commit()
    return MessageResponse(message="Deleted")
