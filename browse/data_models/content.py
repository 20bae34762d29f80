from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ContentKind(str, Enum):
    ARTICLE = "article"
    LECTURE = "lecture"
    PRESENTATION = "presentation"
    EVENT = "event"

    @property
    def plural(self) -> str:
        """Key used for this kind in every counts mapping."""
        return f"{self.value}s"


class CategoryOrder(str, Enum):
    NAME = "name"
    CREATED = "created"


class CategoryRecord(BaseModel):
    """Read-only snapshot of a category row."""

    model_config = {"frozen": True}

    id: str
    name: str
    parentId: str | None = None
    description: str | None = None
    bannerImageUrl: str | None = None


class ContentItemBase(BaseModel):
    model_config = {"frozen": True}

    id: str
    categoryId: str | None = None
    published: bool = True


class ArticleItem(ContentItemBase):
    kind: Literal[ContentKind.ARTICLE] = Field(default=ContentKind.ARTICLE)


class LectureItem(ContentItemBase):
    kind: Literal[ContentKind.LECTURE] = Field(default=ContentKind.LECTURE)


class PresentationItem(ContentItemBase):
    kind: Literal[ContentKind.PRESENTATION] = Field(default=ContentKind.PRESENTATION)


class EventItem(ContentItemBase):
    kind: Literal[ContentKind.EVENT] = Field(default=ContentKind.EVENT)
    eventDate: datetime | None = None


ContentItem = Annotated[
    Union[ArticleItem, LectureItem, PresentationItem, EventItem],
    Field(discriminator="kind"),
]

ITEM_TYPES: dict[ContentKind, type[ContentItemBase]] = {
    ContentKind.ARTICLE: ArticleItem,
    ContentKind.LECTURE: LectureItem,
    ContentKind.PRESENTATION: PresentationItem,
    ContentKind.EVENT: EventItem,
}
