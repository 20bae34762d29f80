"""Own-count computation over content items, one linear pass per call."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Mapping

from data_models.content import ContentItem, ContentKind

Visibility = Callable[[ContentItem], bool]


def is_published(item: ContentItem) -> bool:
    return item.published


def always_visible(item: ContentItem) -> bool:
    return True


DEFAULT_VISIBILITY: Dict[ContentKind, Visibility] = {
    kind: is_published for kind in ContentKind
}


@dataclass
class CategoryCounts:
    """Own counts keyed by category id, plus the uncategorized bucket."""

    by_category: Counter = field(default_factory=Counter)
    uncategorized: int = 0

    def add(self, category_id: str | None) -> None:
        if category_id:
            self.by_category[category_id] += 1
        else:
            self.uncategorized += 1

    def own(self, category_id: str) -> int:
        return self.by_category.get(category_id, 0)

    @property
    def total(self) -> int:
        return sum(self.by_category.values()) + self.uncategorized


def count_by_category(
    items: Iterable[ContentItem], is_visible: Visibility
) -> CategoryCounts:
    """
    Count visible items per exact category id.

    Items failing is_visible are skipped entirely, they do not reach the
    uncategorized bucket either. Ids that match no known category are kept
    under their literal value; resolving them is left to the caller.
    """
    counts = CategoryCounts()
    for item in items:
        if is_visible(item):
            counts.add(item.categoryId)
    return counts


def count_content(
    items: Iterable[ContentItem],
    visibility: Mapping[ContentKind, Visibility] = DEFAULT_VISIBILITY,
) -> Dict[ContentKind, CategoryCounts]:
    """Count a mixed stream of content items, dispatching on each item's kind."""
    counts = {kind: CategoryCounts() for kind in ContentKind}
    for item in items:
        is_visible = visibility.get(item.kind, is_published)
        if is_visible(item):
            counts[item.kind].add(item.categoryId)
    return counts
