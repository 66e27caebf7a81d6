"""
sakhi_api.db.models

Persistence schema for the health-tracking service.

Responsibilities:
- Define ORM models:
  - User: credentials + role
  - PeriodLog, Reminder: owned per-user records
  - Article, Tip, Resource: admin-curated wellness content
  - CommunityPost, Comment: user-authored community content
"""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, date, datetime

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sakhi_api.auth.models import Role
from sakhi_api.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for portability across SQLite/Postgres.
    return datetime.now(UTC).replace(tzinfo=None)


def _new_id() -> str:
    # Opaque string ids; callers must not infer structure from them.
    return uuid.uuid4().hex


class ReminderType(enum.StrEnum):
    period = "PERIOD"
    medication = "MEDICATION"
    appointment = "APPOINTMENT"
    custom = "CUSTOM"


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.user)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    @property
    def user_id(self) -> str:
        # A profile is owned by the user it describes.
        return self.id


class PeriodLog(Base):
    __tablename__ = "period_logs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    flow_intensity: Mapped[str | None] = mapped_column(String(64), nullable=True)
    symptoms: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (Index("ix_period_logs_user_start", "user_id", "start_date"),)


class Reminder(Base):
    __tablename__ = "reminders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), nullable=False)

    type: Mapped[ReminderType] = mapped_column(Enum(ReminderType), nullable=False)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    remind_at: Mapped[datetime] = mapped_column(nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (Index("ix_reminders_user_remind_at", "user_id", "remind_at"),)


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class Tip(Base):
    __tablename__ = "tips"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class CommunityPost(Base):
    __tablename__ = "community_posts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)

    comments: Mapped[list[Comment]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
        lazy="selectin",
    )


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    post_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("community_posts.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    post: Mapped[CommunityPost] = relationship(back_populates="comments")


# --- Module Notes -----------------------------------------------------------
# Every owned table carries `user_id`; that column is the only input the ownership
# policy reads for update/delete. No code path reassigns it after creation.
