"""
sakhi_api.db.repositories.period_logs

Repository for `PeriodLog` entities.

Responsibilities:
- Create, update and delete a user's period logs.
- List history (newest-first) and the chronological start dates used for prediction.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.db.models import PeriodLog


class PeriodLogRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        start_date: date,
        end_date: date | None = None,
        flow_intensity: str | None = None,
        symptoms: str | None = None,
        notes: str | None = None,
    ) -> PeriodLog:
        log = PeriodLog(
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            flow_intensity=flow_intensity,
            symptoms=symptoms,
            notes=notes,
        )
        self._session.add(log)
        await self._session.flush()
        return log

    async def get(self, log_id: str) -> PeriodLog | None:
        return await self._session.get(PeriodLog, log_id)

    async def history(self, user_id: str) -> list[PeriodLog]:
        stmt = (
            select(PeriodLog)
            .where(PeriodLog.user_id == user_id)
            .order_by(desc(PeriodLog.start_date), desc(PeriodLog.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def start_dates(self, user_id: str) -> list[date]:
        # Ascending by start date: the order the predictor expects.
        stmt = (
            select(PeriodLog.start_date)
            .where(PeriodLog.user_id == user_id)
            .order_by(asc(PeriodLog.start_date), asc(PeriodLog.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, log: PeriodLog, changes: dict[str, Any]) -> PeriodLog:
        for key, value in changes.items():
            setattr(log, key, value)
        await self._session.flush()
        return log

    async def delete(self, log: PeriodLog) -> None:
        await self._session.delete(log)
        await self._session.flush()
