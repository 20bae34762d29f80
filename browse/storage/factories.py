"""factory_boy factories for content.db models.

Bind a session before use:

    CategoryFactory._meta.sqlalchemy_session = session
"""

from datetime import datetime, timedelta

import factory
from factory.alchemy import SQLAlchemyModelFactory

from storage.content_models import Article, Category, Event, Lecture, Presentation

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


def _created_at(n: int) -> datetime:
    return BASE_TIME + timedelta(minutes=n)


class CategoryFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Category
        sqlalchemy_session_persistence = "flush"

    id = factory.Sequence(lambda n: f"category-{n}")
    name = factory.Faker("word")
    description = factory.Faker("sentence")
    banner_image_url = None
    parent_id = None
    created_at = factory.Sequence(_created_at)


class ArticleFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Article
        sqlalchemy_session_persistence = "flush"

    id = factory.Sequence(lambda n: f"article-{n}")
    title = factory.Faker("sentence", nb_words=4)
    slug = factory.Sequence(lambda n: f"article-slug-{n}")
    published = True
    category_id = None
    created_at = factory.Sequence(_created_at)


class LectureFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Lecture
        sqlalchemy_session_persistence = "flush"

    id = factory.Sequence(lambda n: f"lecture-{n}")
    title = factory.Faker("sentence", nb_words=4)
    category_id = None
    created_at = factory.Sequence(_created_at)


class PresentationFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Presentation
        sqlalchemy_session_persistence = "flush"

    id = factory.Sequence(lambda n: f"presentation-{n}")
    title = factory.Faker("sentence", nb_words=4)
    published = True
    category_id = None
    created_at = factory.Sequence(_created_at)


class EventFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Event
        sqlalchemy_session_persistence = "flush"

    id = factory.Sequence(lambda n: f"event-{n}")
    title = factory.Faker("sentence", nb_words=4)
    published = True
    event_date = factory.Sequence(lambda n: BASE_TIME + timedelta(days=n))
    category_id = None
    created_at = factory.Sequence(_created_at)


ALL_FACTORIES = (
    CategoryFactory,
    ArticleFactory,
    LectureFactory,
    PresentationFactory,
    EventFactory,
)
