"""
sakhi_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sakhi_api.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The settings the app was built with (tests build apps with non-default settings).
    return request.app.state.settings  # type: ignore[no-any-return]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `sakhi_api.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[no-any-return]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Routers commit explicitly after a successful write.
    async with session_factory() as session:
        yield session
