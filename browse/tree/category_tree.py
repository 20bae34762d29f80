"""
Arena-style forest built from flat category records.

Records live in a flat map keyed by id and children are stored as id lists,
so the forest never holds live parent/child references. Malformed input
(dangling parents, duplicate ids, parent cycles) is recovered locally and
logged; building never raises.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Set

from data_models.content import CategoryRecord

logger = logging.getLogger(__name__)


class CategoryTree:
    def __init__(
        self,
        records: Dict[str, CategoryRecord],
        roots: List[str],
        children: Dict[str, List[str]],
    ):
        self.records = records
        self.roots = roots
        self.children = children

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self.records

    def get(self, category_id: str) -> Optional[CategoryRecord]:
        return self.records.get(category_id)

    @classmethod
    def build(cls, categories: Sequence[CategoryRecord]) -> "CategoryTree":
        """
        Group categories by parent and attach them into a forest.

        Roots are categories with a null, empty or dangling parent. Children
        keep the relative order of the input sequence. Categories that cannot
        be reached from any root sit on a parent cycle: the first cycle member
        found (walking up from the earliest unreached record) is promoted to
        root and the edge closing the cycle is dropped.
        """
        records: Dict[str, CategoryRecord] = {}
        for category in categories:
            if category.id in records:
                logger.warning(
                    f"Duplicate category id {category.id!r}, keeping the first record"
                )
                continue
            records[category.id] = category

        parent_by_id: Dict[str, Optional[str]] = {}
        children_by_parent: Dict[Optional[str], List[str]] = {}
        for category_id, category in records.items():
            parent_id = category.parentId or None
            if parent_id is not None and parent_id not in records:
                logger.warning(
                    f"Category {category_id!r} references missing parent "
                    f"{parent_id!r}, promoting to root"
                )
                parent_id = None
            parent_by_id[category_id] = parent_id
            children_by_parent.setdefault(parent_id, []).append(category_id)

        roots: List[str] = []
        children: Dict[str, List[str]] = {category_id: [] for category_id in records}
        visited: Set[str] = set()

        def attach(root_id: str) -> None:
            roots.append(root_id)
            visited.add(root_id)
            stack = [root_id]
            while stack:
                current = stack.pop()
                for child_id in children_by_parent.get(current, []):
                    if child_id in visited:
                        logger.warning(
                            f"Parent cycle detected: dropping edge {current!r} -> {child_id!r}"
                        )
                        continue
                    visited.add(child_id)
                    children[current].append(child_id)
                    stack.append(child_id)

        for root_id in children_by_parent.get(None, []):
            attach(root_id)

        for category_id in records:
            if category_id in visited:
                continue
            # Every ancestor of an unreached record is unreached too, so the
            # parent chain has to loop back on itself.
            seen: Set[str] = set()
            current = category_id
            while current not in seen:
                seen.add(current)
                current = parent_by_id[current]  # type: ignore[assignment]
            logger.warning(
                f"Category {current!r} is part of a parent cycle, promoting to root"
            )
            attach(current)

        return cls(records, roots, children)

    def descendant_ids(self, node_id: str) -> Set[str]:
        """Return node_id plus every id reachable through its children."""
        if node_id not in self.records:
            return set()

        result: Set[str] = set()
        stack = [node_id]
        while stack:
            current = stack.pop()
            if current in result:
                continue
            result.add(current)
            stack.extend(self.children.get(current, []))
        return result

    def post_order(self) -> Iterator[str]:
        """Yield every node once, children before their parent, roots in order."""
        emitted: Set[str] = set()
        for root_id in self.roots:
            stack = [(root_id, False)]
            while stack:
                current, expanded = stack.pop()
                if expanded:
                    emitted.add(current)
                    yield current
                    continue
                if current in emitted:
                    continue
                stack.append((current, True))
                for child_id in reversed(self.children.get(current, [])):
                    if child_id not in emitted:
                        stack.append((child_id, False))
