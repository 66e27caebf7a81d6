"""
sakhi_api.db.repositories.users

Repository for `User` entities (the credential store).
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.auth.models import Role
from sakhi_api.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: Role = Role.user,
    ) -> User:
        user = User(email=email, password_hash=password_hash, name=name, role=role)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists(self, user_id: str) -> bool:
        return await self.get(user_id) is not None

    async def set_name(self, user: User, name: str | None) -> User:
        # Role is intentionally not updatable through this repo.
        user.name = name
        await self._session.flush()
        return user
