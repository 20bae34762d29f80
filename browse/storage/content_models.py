"""Content database models.

This module defines SQLAlchemy models for content.db: the category tree and
the four content collections shown on the browse and sitemap pages.

IMPORTANT: category_id and parent_id are plain columns, not foreign keys.
Categories can be deleted by the admin tools while content still points at
them, so references are resolved at the application level (see
tree/tree_aggregator.py).
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from storage.db_helpers import DateTime

# Schema version (increment on breaking changes)
CONTENT_SCHEMA_VERSION = "1.0.0"


def new_id() -> str:
    return uuid.uuid4().hex


class ContentBase(DeclarativeBase):
    pass


class Category(ContentBase):
    __tablename__ = "category"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]]
    banner_image_url: Mapped[Optional[str]]
    parent_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (
        Index("idx_category_parent", "parent_id"),
        Index("idx_category_name", "name"),
    )


class Article(ContentBase):
    __tablename__ = "article"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    published: Mapped[bool] = mapped_column(Boolean, default=False)
    category_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (Index("idx_article_category", "category_id", "published"),)


class Lecture(ContentBase):
    """Lectures have no published flag, every row is publicly visible."""

    __tablename__ = "lecture"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    category_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (Index("idx_lecture_category", "category_id"),)


class Presentation(ContentBase):
    __tablename__ = "presentation"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False)
    category_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (Index("idx_presentation_category", "category_id", "published"),)


class Event(ContentBase):
    __tablename__ = "event"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False)
    event_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    category_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (
        Index("idx_event_category", "category_id", "published"),
        Index("idx_event_date", "event_date"),
    )


class Meta(ContentBase):
    """Metadata key-value store for content.db.

    Used for storing schema_version and other database-level metadata.
    """

    __tablename__ = "meta"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(String)
