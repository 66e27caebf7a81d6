"""
sakhi_api.api.routers.health_wellness

Wellness content: articles, tips and resources.

Responsibilities:
- Public read access to published content.
- Admin-only content creation.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from sakhi_api.api.deps import db_session
from sakhi_api.api.models import ApiModel
from sakhi_api.auth.deps import get_optional_identity, require_admin
from sakhi_api.auth.models import Identity
from sakhi_api.db.repositories.wellness import WellnessRepo
from sakhi_api.errors import NotFound

router = APIRouter(prefix="/api/health-wellness", tags=["health-wellness"])


class ArticleCreateRequest(ApiModel):
    title: str = Field(min_length=3, max_length=256)
    content: str = Field(min_length=10)
    category: str | None = Field(default=None, max_length=128)
    is_published: bool = True


class ArticleResponse(ApiModel):
    id: str
    title: str
    content: str
    category: str | None
    is_published: bool
    created_at: datetime


class TipCreateRequest(ApiModel):
    content: str = Field(min_length=1)
    category: str | None = Field(default=None, max_length=128)


class TipResponse(ApiModel):
    id: str
    content: str
    category: str | None
    created_at: datetime


class ResourceCreateRequest(ApiModel):
    title: str = Field(min_length=3, max_length=256)
    url: str | None = Field(default=None, max_length=2048)
    description: str | None = None
    category: str | None = Field(default=None, max_length=128)


class ResourceResponse(ApiModel):
    id: str
    title: str
    url: str | None
    description: str | None
    category: str | None
    created_at: datetime


@router.get("/articles", response_model=list[ArticleResponse])
async def list_articles(session: AsyncSession = Depends(db_session)) -> list[ArticleResponse]:
    articles = await WellnessRepo(session).list_published_articles()
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    identity: Identity | None = Depends(get_optional_identity),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    article = await WellnessRepo(session).get_article(article_id)
    # Drafts are only visible to admins; everyone else sees a plain 404.
    if article is None or not (article.is_published or (identity and identity.is_admin)):
        raise NotFound("Article not found")
    return ArticleResponse.model_validate(article)


@router.post(
    "/articles",
    response_model=ArticleResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_article(
    body: ArticleCreateRequest,
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    article = await WellnessRepo(session).create_article(
        title=body.title,
        content=body.content,
        category=body.category,
        is_published=body.is_published,
    )
    await session.commit()
    return ArticleResponse.model_validate(article)


@router.get("/tips", response_model=list[TipResponse])
async def list_tips(session: AsyncSession = Depends(db_session)) -> list[TipResponse]:
    return [TipResponse.model_validate(t) for t in await WellnessRepo(session).list_tips()]


@router.post(
    "/tips",
    response_model=TipResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_tip(
    body: TipCreateRequest,
    session: AsyncSession = Depends(db_session),
) -> TipResponse:
    tip = await WellnessRepo(session).create_tip(content=body.content, category=body.category)
    await session.commit()
    return TipResponse.model_validate(tip)


@router.get("/resources", response_model=list[ResourceResponse])
async def list_resources(
    session: AsyncSession = Depends(db_session),
) -> list[ResourceResponse]:
    resources = await WellnessRepo(session).list_resources()
    return [ResourceResponse.model_validate(r) for r in resources]


@router.post(
    "/resources",
    response_model=ResourceResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_resource(
    body: ResourceCreateRequest,
    session: AsyncSession = Depends(db_session),
) -> ResourceResponse:
    resource = await WellnessRepo(session).create_resource(
        title=body.title,
        url=body.url,
        description=body.description,
        category=body.category,
    )
    await session.commit()
    return ResourceResponse.model_validate(resource)


# --- Module Notes -----------------------------------------------------------
# Content here has no owner, so the ownership policy does not apply; writes are
# gated on the ADMIN role alone.
