"""Load categories and content from a YAML document into content.db.

Expected layout (every section optional):

    categories:
      - id: physics
        name: Physics
      - id: quantum
        name: Quantum
        parent: physics
    articles:
      - title: Entanglement
        slug: entanglement
        category: quantum
        published: true
    lectures:
      - title: Intro
        category: physics
    presentations:
      - title: Slides
        published: false
    events:
      - title: Open day
        date: 2025-05-01T18:00:00
        published: true
"""

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict

from data_models.content import ContentKind
from storage.content_models import Article, Category, Event, Lecture, Presentation
from storage.manager import StorageManager
from utils.config import load_yaml

logger = logging.getLogger(__name__)

SECTIONS = {
    "articles": ContentKind.ARTICLE,
    "lectures": ContentKind.LECTURE,
    "presentations": ContentKind.PRESENTATION,
    "events": ContentKind.EVENT,
}


def _slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def _coerce_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def _build_content(kind: ContentKind, entry: Dict[str, Any]):
    common = {
        "title": entry["title"],
        "category_id": entry.get("category"),
    }
    if "id" in entry:
        common["id"] = str(entry["id"])
    if "created_at" in entry:
        common["created_at"] = _coerce_datetime(entry["created_at"])

    if kind == ContentKind.ARTICLE:
        return Article(
            **common,
            slug=entry.get("slug") or _slugify(entry["title"]),
            published=bool(entry.get("published", False)),
        )
    if kind == ContentKind.LECTURE:
        return Lecture(**common)
    if kind == ContentKind.PRESENTATION:
        return Presentation(**common, published=bool(entry.get("published", False)))
    return Event(
        **common,
        published=bool(entry.get("published", False)),
        event_date=_coerce_datetime(entry["date"]),
    )


def seed_from_yaml(storage_manager: StorageManager, path: Path) -> Dict[str, int]:
    """
    Insert every category and content entry from the YAML file at path.

    Returns:
        Number of rows inserted per section

    Raises:
        ValueError: If the file is not a mapping or an entry misses a field
    """
    data = load_yaml(path)
    inserted = {"categories": 0, **{section: 0 for section in SECTIONS}}

    with storage_manager.get_session() as session:
        for entry in data.get("categories") or []:
            if "name" not in entry:
                raise ValueError(f"Category entry without a name in {path}: {entry}")
            category = Category(
                name=entry["name"],
                description=entry.get("description"),
                banner_image_url=entry.get("banner_image_url"),
                parent_id=entry.get("parent"),
            )
            if "id" in entry:
                category.id = str(entry["id"])
            if "created_at" in entry:
                category.created_at = _coerce_datetime(entry["created_at"])
            session.add(category)
            inserted["categories"] += 1

        for section, kind in SECTIONS.items():
            for entry in data.get(section) or []:
                try:
                    session.add(_build_content(kind, entry))
                except KeyError as e:
                    raise ValueError(
                        f"{section} entry missing field {e} in {path}: {entry}"
                    ) from e
                inserted[section] += 1

        session.commit()

    logger.info(f"Seeded content from {path}: {inserted}")
    return inserted
