"""
Roll-up of content counts over the category forest.

TreeAggregator combines a CategoryTree with per-kind own counts, folds the
counts bottom-up so each node carries its aggregate (self plus descendants),
and serialises the forest into the view model served by the sitemap and
browse endpoints. It performs no I/O.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set

from data_models.browse import CategoryForest, CategoryNode, ContentCounts, SiteStats
from data_models.content import CategoryRecord, ContentItem, ContentKind
from tree.category_tree import CategoryTree
from tree.content_counter import (
    DEFAULT_VISIBILITY,
    CategoryCounts,
    Visibility,
    count_content,
)

logger = logging.getLogger(__name__)

KindCounts = Dict[ContentKind, int]


class TreeAggregator:
    def __init__(
        self,
        categories: Sequence[CategoryRecord],
        items: Iterable[ContentItem],
        visibility: Optional[Mapping[ContentKind, Visibility]] = None,
    ):
        self.tree = CategoryTree.build(categories)
        self.own_counts: Dict[ContentKind, CategoryCounts] = count_content(
            items, visibility if visibility is not None else DEFAULT_VISIBILITY
        )
        self.aggregates = self._fold()
        self.surviving = self._surviving_ids()

        dangling = self.dangling_counts()
        for kind, count in dangling.items():
            if count:
                logger.warning(
                    f"{count} visible {kind.plural} reference unknown categories "
                    "and are excluded from the tree"
                )

    def _fold(self) -> Dict[str, KindCounts]:
        """Post-order fold: aggregate = own + sum(aggregate of children)."""
        aggregates: Dict[str, KindCounts] = {}
        for node_id in self.tree.post_order():
            totals = {kind: self.own_counts[kind].own(node_id) for kind in ContentKind}
            for child_id in self.tree.children[node_id]:
                for kind in ContentKind:
                    totals[kind] += aggregates[child_id][kind]
            aggregates[node_id] = totals
        return aggregates

    def _surviving_ids(self) -> Set[str]:
        """A node survives if it has content anywhere below it or a surviving child."""
        surviving: Set[str] = set()
        for node_id in self.tree.post_order():
            has_content = any(self.aggregates[node_id].values())
            if has_content or any(
                child_id in surviving for child_id in self.tree.children[node_id]
            ):
                surviving.add(node_id)
        return surviving

    def counts_for(self, node_id: str) -> ContentCounts:
        return ContentCounts.from_kinds(self.aggregates.get(node_id, {}))

    def uncategorized_counts(self) -> ContentCounts:
        return ContentCounts.from_kinds(
            {kind: counts.uncategorized for kind, counts in self.own_counts.items()}
        )

    def dangling_counts(self) -> KindCounts:
        """Visible items per kind whose category id is not in the snapshot."""
        return {
            kind: sum(
                count
                for category_id, count in counts.by_category.items()
                if category_id not in self.tree
            )
            for kind, counts in self.own_counts.items()
        }

    def root_totals(self) -> KindCounts:
        totals = {kind: 0 for kind in ContentKind}
        for root_id in self.tree.roots:
            for kind in ContentKind:
                totals[kind] += self.aggregates[root_id][kind]
        return totals

    def stats(self) -> SiteStats:
        totals = self.root_totals()
        for kind, counts in self.own_counts.items():
            totals[kind] += counts.uncategorized
        return SiteStats(
            totalArticles=totals[ContentKind.ARTICLE],
            totalLectures=totals[ContentKind.LECTURE],
            totalPresentations=totals[ContentKind.PRESENTATION],
            totalEvents=totals[ContentKind.EVENT],
            totalCategories=len(self.tree),
        )

    def aggregate(self, prune: bool = True) -> CategoryForest:
        """
        Build the nested view model.

        Args:
            prune: Drop subtrees without any visible content (default: True)

        Returns:
            CategoryForest with categories, uncategorizedCounts and stats
        """
        nodes: Dict[str, CategoryNode] = {}
        for node_id in self.tree.post_order():
            record = self.tree.records[node_id]
            nodes[node_id] = CategoryNode(
                id=record.id,
                name=record.name,
                counts=self.counts_for(node_id),
                children=[
                    nodes[child_id]
                    for child_id in self.tree.children[node_id]
                    if not prune or child_id in self.surviving
                ],
            )

        return CategoryForest(
            categories=[
                nodes[root_id]
                for root_id in self.tree.roots
                if not prune or root_id in self.surviving
            ],
            uncategorizedCounts=self.uncategorized_counts(),
            stats=self.stats(),
        )
