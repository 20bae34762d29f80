"""
Read functions over content.db.

Everything here takes an open session and returns pydantic records, never ORM
objects, so callers can close the session before aggregating. Database errors
are not caught: a failed read must fail the whole request.
"""

import logging
from datetime import datetime
from typing import Dict, List, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from data_models.browse import ArticlePreview, CategoryListItem, FooterCategory
from data_models.content import (
    ITEM_TYPES,
    CategoryOrder,
    CategoryRecord,
    ContentItem,
    ContentKind,
)
from storage.content_models import Article, Category, ContentBase, Event, Lecture, Presentation
from tree.content_counter import Visibility, always_visible, is_published

logger = logging.getLogger(__name__)

CONTENT_MODELS: Dict[ContentKind, Type[ContentBase]] = {
    ContentKind.ARTICLE: Article,
    ContentKind.LECTURE: Lecture,
    ContentKind.PRESENTATION: Presentation,
    ContentKind.EVENT: Event,
}

# Lecture rows carry no published column, all of them are public
VISIBILITY: Dict[ContentKind, Visibility] = {
    ContentKind.ARTICLE: is_published,
    ContentKind.LECTURE: always_visible,
    ContentKind.PRESENTATION: is_published,
    ContentKind.EVENT: is_published,
}


def fetch_categories(
    session: Session, order: CategoryOrder = CategoryOrder.NAME
) -> List[CategoryRecord]:
    """Fetch every category, unfiltered, in the order the tree should keep."""
    query = select(Category)
    if order == CategoryOrder.NAME:
        query = query.order_by(Category.name, Category.created_at)
    else:
        query = query.order_by(Category.created_at, Category.name)

    return [
        CategoryRecord(
            id=category.id,
            name=category.name,
            parentId=category.parent_id,
            description=category.description,
            bannerImageUrl=category.banner_image_url,
        )
        for category in session.execute(query).scalars()
    ]


def fetch_content(session: Session, kind: ContentKind) -> List[ContentItem]:
    """Fetch id, category and visibility flag for every item of one kind."""
    model = CONTENT_MODELS[kind]
    item_type = ITEM_TYPES[kind]
    rows = session.execute(select(model).order_by(model.created_at)).scalars()

    items = []
    for row in rows:
        fields = {
            "id": row.id,
            "categoryId": row.category_id,
            "published": getattr(row, "published", True),
        }
        if kind == ContentKind.EVENT:
            fields["eventDate"] = row.event_date
        items.append(item_type(**fields))
    return items


def fetch_all_content(session: Session) -> List[ContentItem]:
    items: List[ContentItem] = []
    for kind in ContentKind:
        kind_items = fetch_content(session, kind)
        logger.info(f"Fetched {len(kind_items)} {kind.plural}")
        items.extend(kind_items)
    return items


def count_upcoming_events(session: Session, now: datetime) -> int:
    """Count published events starting at or after now."""
    return session.execute(
        select(func.count(Event.id)).where(
            Event.published.is_(True), Event.event_date >= now
        )
    ).scalar_one()


def fetch_footer_categories(session: Session, per_category: int) -> List[FooterCategory]:
    """
    Categories with published articles, each with its newest articles.

    Categories are ordered by name and hold at most per_category article
    previews, newest first.
    """
    articles = session.execute(
        select(Article)
        .where(Article.published.is_(True), Article.category_id.is_not(None))
        .order_by(Article.created_at.desc())
    ).scalars()

    previews: Dict[str, List[ArticlePreview]] = {}
    for article in articles:
        bucket = previews.setdefault(article.category_id, [])
        if len(bucket) < per_category:
            bucket.append(
                ArticlePreview(id=article.id, title=article.title, slug=article.slug)
            )

    categories = session.execute(select(Category).order_by(Category.name)).scalars()
    return [
        FooterCategory(id=category.id, name=category.name, articles=previews[category.id])
        for category in categories
        if previews.get(category.id)
    ]


def list_categories(session: Session) -> List[CategoryListItem]:
    categories = session.execute(select(Category).order_by(Category.name)).scalars()
    return [
        CategoryListItem(
            id=category.id,
            name=category.name,
            description=category.description,
            parentId=category.parent_id,
        )
        for category in categories
    ]
