"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, an HTTP client, and
pre-provisioned users (two regular users and an admin) with ready-made credentials.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import pytest_asyncio
from fastapi import FastAPI

from sakhi_api.api.app import create_app
from sakhi_api.auth.jwt import TokenCodec
from sakhi_api.auth.models import Identity, Role
from sakhi_api.auth.password import hash_password
from sakhi_api.db.repositories.users import UserRepo
from sakhi_api.settings import Settings


@dataclass(frozen=True)
class TestUser:
    __test__ = False  # not a test class

    id: str
    email: str
    role: Role
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest_asyncio.fixture()
async def app(tmp_path) -> AsyncIterator[FastAPI]:
    settings = Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'sakhi-test.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )
    app = create_app(settings=settings)
    # httpx ASGITransport does not manage lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def make_user(app: FastAPI, email: str, role: Role = Role.user) -> TestUser:
    async with app.state.sessionmaker() as session:
        user = await UserRepo(session).create(
            email=email, password_hash=hash_password("password123", rounds=4), role=role
        )
        await session.commit()
    codec: TokenCodec = app.state.token_codec
    token = codec.issue(Identity(user_id=user.id, role=role))
    return TestUser(id=user.id, email=email, role=role, token=token)


@pytest_asyncio.fixture()
async def alice(app: FastAPI) -> TestUser:
    return await make_user(app, "alice@example.com")


@pytest_asyncio.fixture()
async def bob(app: FastAPI) -> TestUser:
    return await make_user(app, "bob@example.com")


@pytest_asyncio.fixture()
async def admin(app: FastAPI) -> TestUser:
    return await make_user(app, "admin@example.com", role=Role.admin)
