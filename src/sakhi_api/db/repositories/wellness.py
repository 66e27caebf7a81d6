"""
sakhi_api.db.repositories.wellness

Repository for admin-curated wellness content (articles, tips, resources).
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from sakhi_api.db.models import Article, Resource, Tip


class WellnessRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_article(
        self,
        *,
        title: str,
        content: str,
        category: str | None = None,
        is_published: bool = True,
    ) -> Article:
        article = Article(
            title=title, content=content, category=category, is_published=is_published
        )
        self._session.add(article)
        await self._session.flush()
        return article

    async def get_article(self, article_id: str) -> Article | None:
        return await self._session.get(Article, article_id)

    async def list_published_articles(self) -> list[Article]:
        stmt = (
            select(Article)
            .where(Article.is_published.is_(True))
            .order_by(desc(Article.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def create_tip(self, *, content: str, category: str | None = None) -> Tip:
        tip = Tip(content=content, category=category)
        self._session.add(tip)
        await self._session.flush()
        return tip

    async def list_tips(self) -> list[Tip]:
        stmt = select(Tip).order_by(desc(Tip.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def create_resource(
        self,
        *,
        title: str,
        url: str | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> Resource:
        resource = Resource(title=title, url=url, description=description, category=category)
        self._session.add(resource)
        await self._session.flush()
        return resource

    async def list_resources(self) -> list[Resource]:
        stmt = select(Resource).order_by(desc(Resource.created_at))
        return list((await self._session.execute(stmt)).scalars().all())
