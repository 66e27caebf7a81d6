"""
sakhi_api.api.routers.period_tracking

Period log endpoints and cycle prediction.

Responsibilities:
- Create logs for oneself (or, as admin, on a user's behalf).
- List a user's history and predict their next period from it.
- Update/delete a log: 404 when absent, then the ownership check on the stored owner.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from sakhi_api.api.deps import db_session
from sakhi_api.api.models import ApiModel, CalendarDate, MessageResponse, NotNull
from sakhi_api.auth.deps import get_identity
from sakhi_api.auth.models import Identity
from sakhi_api.auth.policy import authorize_existing, enforce
from sakhi_api.db.repositories.period_logs import PeriodLogRepo
from sakhi_api.db.repositories.users import UserRepo
from sakhi_api.errors import BadRequest, NotFound
from sakhi_api.prediction import INSUFFICIENT_DATA, predict

router = APIRouter(prefix="/api/period-tracking", tags=["period-tracking"])


class PeriodLogCreateRequest(ApiModel):
    user_id: str = Field(min_length=1, max_length=32)
    start_date: CalendarDate
    end_date: CalendarDate | None = None
    flow_intensity: str | None = Field(default=None, max_length=64)
    symptoms: str | None = None
    notes: str | None = None


class PeriodLogUpdateRequest(ApiModel):
    # No user_id: ownership never transfers. Unknown keys (including userId) are ignored.
    start_date: Annotated[CalendarDate | None, NotNull] = None
    end_date: CalendarDate | None = None
    flow_intensity: str | None = Field(default=None, max_length=64)
    symptoms: str | None = None
    notes: str | None = None


class PeriodLogResponse(ApiModel):
    id: str
    user_id: str
    start_date: date
    end_date: date | None
    flow_intensity: str | None
    symptoms: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class PredictionResponse(ApiModel):
    average_cycle_length_days: int
    last_period_start: date
    predicted_next_period: date


@router.post("/log", response_model=PeriodLogResponse, status_code=HTTP_201_CREATED)
async def create_log(
    body: PeriodLogCreateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> PeriodLogResponse:
    enforce(identity, body.user_id)
    if not await UserRepo(session).exists(body.user_id):
        raise NotFound("User not found")

    log = await PeriodLogRepo(session).create(
        user_id=body.user_id,
        start_date=body.start_date,
        end_date=body.end_date,
        flow_intensity=body.flow_intensity,
        symptoms=body.symptoms,
        notes=body.notes,
    )
    await session.commit()
    return PeriodLogResponse.model_validate(log)


@router.get("/history/{user_id}", response_model=list[PeriodLogResponse])
async def get_history(
    user_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> list[PeriodLogResponse]:
    enforce(identity, user_id)
    logs = await PeriodLogRepo(session).history(user_id)
    return [PeriodLogResponse.model_validate(log) for log in logs]


@router.get("/prediction/{user_id}")
async def get_prediction(
    user_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    enforce(identity, user_id)
    result = predict(await PeriodLogRepo(session).start_dates(user_id))
    if result is INSUFFICIENT_DATA:
        return MessageResponse(message="Not enough data to predict").model_dump(by_alias=True)
    return PredictionResponse.model_validate(result).model_dump(by_alias=True, mode="json")


@router.put("/{log_id}", response_model=PeriodLogResponse)
async def update_log(
    log_id: str,
    body: PeriodLogUpdateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> PeriodLogResponse:
    logs = PeriodLogRepo(session)
    log = authorize_existing(identity, await logs.get(log_id), not_found="Log not found")

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise BadRequest("No fields to update")
    await logs.update(log, changes)
    await session.commit()
    return PeriodLogResponse.model_validate(log)


@router.delete("/{log_id}", response_model=MessageResponse)
async def delete_log(
    log_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    logs = PeriodLogRepo(session)
    log = authorize_existing(identity, await logs.get(log_id), not_found="Log not found")
    await logs.delete(log)
    await session.commit()
    return MessageResponse(message="Deleted")


# --- Module Notes -----------------------------------------------------------
# Route order matters: `/history/...` and `/prediction/...` are declared before the
# catch-all `/{log_id}` handlers, which only accept PUT/DELETE anyway.
