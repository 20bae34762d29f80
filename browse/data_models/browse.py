from typing import List, Mapping

from pydantic import BaseModel, Field

from data_models.content import ContentKind


class ContentCounts(BaseModel):
    articles: int = 0
    lectures: int = 0
    presentations: int = 0
    events: int = 0

    @classmethod
    def from_kinds(cls, counts: Mapping[ContentKind, int]) -> "ContentCounts":
        return cls(**{kind.plural: counts.get(kind, 0) for kind in ContentKind})

    def get(self, kind: ContentKind) -> int:
        return getattr(self, kind.plural)

    def is_empty(self) -> bool:
        return all(self.get(kind) == 0 for kind in ContentKind)


class CategoryNode(BaseModel):
    id: str
    name: str
    counts: ContentCounts
    children: list["CategoryNode"] = []


class SiteStats(BaseModel):
    totalArticles: int = 0
    totalLectures: int = 0
    totalPresentations: int = 0
    totalEvents: int = 0
    totalCategories: int = 0


class CategoryForest(BaseModel):
    categories: List[CategoryNode] = []
    uncategorizedCounts: ContentCounts = Field(default_factory=ContentCounts)
    stats: SiteStats = Field(default_factory=SiteStats)


class SitemapResponse(CategoryForest):
    upcomingEventsCount: int = 0


# Browse page models


class BrowseCounts(ContentCounts):
    total: int = 0

    @classmethod
    def from_kinds(cls, counts: Mapping[ContentKind, int]) -> "BrowseCounts":
        values = {kind.plural: counts.get(kind, 0) for kind in ContentKind}
        return cls(**values, total=sum(values.values()))


class BrowseCategoryItem(BaseModel):
    id: str
    name: str
    description: str | None = None
    bannerImageUrl: str | None = None
    parentId: str | None = None
    counts: BrowseCounts
    subcategories: list["BrowseCategoryItem"] = []


class BrowseResponse(BaseModel):
    categories: List[BrowseCategoryItem] = []
    totalCounts: BrowseCounts = Field(default_factory=BrowseCounts)


# Footer sitemap and category listing


class ArticlePreview(BaseModel):
    id: str
    title: str
    slug: str


class FooterCategory(BaseModel):
    id: str
    name: str
    articles: List[ArticlePreview] = []


class FooterSitemapResponse(BaseModel):
    categories: List[FooterCategory] = []


class CategoryListItem(BaseModel):
    id: str
    name: str
    description: str | None = None
    parentId: str | None = None


# Rebuild models to handle forward references (recursive trees)
CategoryNode.model_rebuild()
BrowseCategoryItem.model_rebuild()
