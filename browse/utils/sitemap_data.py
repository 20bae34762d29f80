"""
Builders for the browse and sitemap view models.

Each builder opens one read-only session, reads a complete snapshot of the
categories and content, closes the session and only then aggregates. Nothing
is cached between calls.
"""

import logging
from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from data_models.browse import (
    BrowseResponse,
    CategoryListItem,
    FooterSitemapResponse,
    SitemapResponse,
)
from data_models.content import CategoryOrder, CategoryRecord, ContentItem
from storage import repository
from storage.manager import StorageManager
from tree.browse_view import build_browse_view
from tree.tree_aggregator import TreeAggregator

logger = logging.getLogger(__name__)


def load_snapshot(
    session: Session, order: CategoryOrder = CategoryOrder.NAME
) -> Tuple[List[CategoryRecord], List[ContentItem]]:
    """Read every category and content item; any read failure propagates."""
    categories = repository.fetch_categories(session, order)
    items = repository.fetch_all_content(session)
    logger.info(
        f"Loaded snapshot with {len(categories)} categories and {len(items)} items"
    )
    return categories, items


def build_sitemap_data(
    storage_manager: StorageManager,
    order: CategoryOrder = CategoryOrder.NAME,
    now: datetime | None = None,
) -> SitemapResponse:
    """Pruned category forest with uncategorized counts and site stats."""
    if now is None:
        now = datetime.now()

    with storage_manager.get_session(read_only=True) as session:
        categories, items = load_snapshot(session, order)
        upcoming_events = repository.count_upcoming_events(session, now)

    forest = TreeAggregator(categories, items, repository.VISIBILITY).aggregate(prune=True)
    return SitemapResponse(
        categories=forest.categories,
        uncategorizedCounts=forest.uncategorizedCounts,
        stats=forest.stats,
        upcomingEventsCount=upcoming_events,
    )


def build_browse_data(
    storage_manager: StorageManager, order: CategoryOrder = CategoryOrder.NAME
) -> BrowseResponse:
    """Every category with aggregate counts, including empty ones."""
    with storage_manager.get_session(read_only=True) as session:
        categories, items = load_snapshot(session, order)

    return build_browse_view(TreeAggregator(categories, items, repository.VISIBILITY))


def build_footer_sitemap(
    storage_manager: StorageManager, per_category: int = 5
) -> FooterSitemapResponse:
    with storage_manager.get_session(read_only=True) as session:
        categories = repository.fetch_footer_categories(session, per_category)
    return FooterSitemapResponse(categories=categories)


def list_categories(storage_manager: StorageManager) -> List[CategoryListItem]:
    with storage_manager.get_session(read_only=True) as session:
        return repository.list_categories(session)
