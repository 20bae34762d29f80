from typing import Dict

from data_models.browse import BrowseCategoryItem, BrowseCounts, BrowseResponse
from tree.tree_aggregator import TreeAggregator


def build_browse_view(aggregator: TreeAggregator) -> BrowseResponse:
    """
    Browse page view: every category (no pruning) with its aggregate counts.

    totalCounts sums the root categories only, uncategorized content is not
    listed on the browse page.
    """
    tree = aggregator.tree
    items: Dict[str, BrowseCategoryItem] = {}
    for node_id in tree.post_order():
        record = tree.records[node_id]
        items[node_id] = BrowseCategoryItem(
            id=record.id,
            name=record.name,
            description=record.description,
            bannerImageUrl=record.bannerImageUrl,
            parentId=record.parentId,
            counts=BrowseCounts.from_kinds(aggregator.aggregates[node_id]),
            subcategories=[items[child_id] for child_id in tree.children[node_id]],
        )

    return BrowseResponse(
        categories=[items[root_id] for root_id in tree.roots],
        totalCounts=BrowseCounts.from_kinds(aggregator.root_totals()),
    )
