"""
sakhi_api.db.repositories.community

Repository for community posts and their comments.

Responsibilities:
- Create/list/fetch posts with comments eagerly loaded (oldest comment first).
- Add comments and delete posts together with their comments.
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.db.models import Comment, CommunityPost


class CommunityRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_post(
        self,
        *,
        user_id: str,
        title: str,
        content: str,
        category: str | None = None,
    ) -> CommunityPost:
        post = CommunityPost(
            user_id=user_id, title=title, content=content, category=category, comments=[]
        )
        self._session.add(post)
        await self._session.flush()
        return post

    async def get_post(self, post_id: str) -> CommunityPost | None:
        return await self._session.get(CommunityPost, post_id)

    async def list_posts(self) -> list[CommunityPost]:
        stmt = select(CommunityPost).order_by(desc(CommunityPost.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def add_comment(self, *, post_id: str, user_id: str, content: str) -> Comment:
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        self._session.add(comment)
        await self._session.flush()
        return comment

    async def delete_post(self, post: CommunityPost) -> None:
        # Comments go with the post via the ORM cascade.
        await self._session.delete(post)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# `CommunityPost.comments` uses selectin loading so serializing a post never
# triggers an implicit (and, under asyncio, illegal) lazy load.
