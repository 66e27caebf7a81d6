"""
sakhi_api.db.repositories.reminders

Repository for `Reminder` entities.

Responsibilities:
- Create, load, update and delete reminders.
- List a user's reminders soonest first.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.db.models import Reminder, ReminderType


class ReminderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        type: ReminderType,
        title: str,
        remind_at: datetime,
        description: str | None = None,
    ) -> Reminder:
        reminder = Reminder(
            user_id=user_id,
            type=type,
            title=title,
            description=description,
            remind_at=remind_at,
        )
        self._session.add(reminder)
        await self._session.flush()
        return reminder

    async def get(self, reminder_id: str) -> Reminder | None:
        return await self._session.get(Reminder, reminder_id)

    async def list_for_user(self, user_id: str) -> list[Reminder]:
        stmt = select(Reminder).where(Reminder.user_id == user_id).order_by(asc(Reminder.remind_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, reminder: Reminder, changes: dict[str, Any]) -> Reminder:
        for key, value in changes.items():
            setattr(reminder, key, value)
        await self._session.flush()
        return reminder

    async def delete(self, reminder: Reminder) -> None:
        await self._session.delete(reminder)
        await self._session.flush()
