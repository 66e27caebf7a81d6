"""
sakhi_api.api.routers.community

Community posts and comments.

Responsibilities:
- Authenticated users post and comment as themselves (author = caller).
- Public reads of posts with their comments (oldest comment first).
- Post deletion by its author or an admin; comments are removed with the post.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from sakhi_api.api.deps import db_session
from sakhi_api.api.models import ApiModel, MessageResponse
from sakhi_api.auth.deps import get_identity
from sakhi_api.auth.models import Identity
from sakhi_api.auth.policy import authorize_existing
from sakhi_api.db.repositories.community import CommunityRepo
from sakhi_api.errors import NotFound

router = APIRouter(prefix="/api/community", tags=["community"])


class PostCreateRequest(ApiModel):
    title: str = Field(min_length=3, max_length=256)
    content: str = Field(min_length=10)
    category: str | None = Field(default=None, max_length=128)


class CommentCreateRequest(ApiModel):
    post_id: str = Field(min_length=1, max_length=32)
    content: str = Field(min_length=1)


class CommentResponse(ApiModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime


class PostResponse(ApiModel):
    id: str
    user_id: str
    title: str
    content: str
    category: str | None
    created_at: datetime
    comments: list[CommentResponse] = Field(default_factory=list)


@router.post("/posts", response_model=PostResponse, status_code=HTTP_201_CREATED)
async def create_post(
    body: PostCreateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> PostResponse:
    post = await CommunityRepo(session).create_post(
        user_id=identity.user_id,
        title=body.title,
        content=body.content,
        category=body.category,
    )
    await session.commit()
    return PostResponse.model_validate(post)


@router.get("/posts", response_model=list[PostResponse])
async def list_posts(session: AsyncSession = Depends(db_session)) -> list[PostResponse]:
    posts = await CommunityRepo(session).list_posts()
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, session: AsyncSession = Depends(db_session)) -> PostResponse:
    post = await CommunityRepo(session).get_post(post_id)
    if post is None:
        raise NotFound("Post not found")
    return PostResponse.model_validate(post)


@router.post("/comments", response_model=CommentResponse, status_code=HTTP_201_CREATED)
async def create_comment(
    body: CommentCreateRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> CommentResponse:
    community = CommunityRepo(session)
    if await community.get_post(body.post_id) is None:
        raise NotFound("Post not found")
    comment = await community.add_comment(
        post_id=body.post_id, user_id=identity.user_id, content=body.content
    )
    await session.commit()
    return CommentResponse.model_validate(comment)


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    community = CommunityRepo(session)
    post = authorize_existing(
        identity, await community.get_post(post_id), not_found="Post not found"
    )
    await community.delete_post(post)
    await session.commit()
    return MessageResponse(message="Deleted")
