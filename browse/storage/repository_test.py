from datetime import datetime, timedelta

from data_models.content import (
    ArticleItem,
    CategoryOrder,
    ContentKind,
    EventItem,
    LectureItem,
)
from storage import repository
from storage.factories import (
    BASE_TIME,
    ArticleFactory,
    CategoryFactory,
    EventFactory,
    LectureFactory,
    PresentationFactory,
)


class TestFetchCategories:
    def test_orders_by_name(self, content_session):
        CategoryFactory(id="c", name="Chemistry")
        CategoryFactory(id="a", name="Astronomy")
        CategoryFactory(id="b", name="Biology", parent_id="a")

        categories = repository.fetch_categories(content_session)

        assert [c.name for c in categories] == ["Astronomy", "Biology", "Chemistry"]
        assert categories[1].parentId == "a"

    def test_orders_by_creation_time(self, content_session):
        CategoryFactory(id="z", name="Zoology", created_at=BASE_TIME)
        CategoryFactory(id="a", name="Astronomy", created_at=BASE_TIME + timedelta(hours=1))

        categories = repository.fetch_categories(content_session, CategoryOrder.CREATED)

        assert [c.id for c in categories] == ["z", "a"]

    def test_maps_display_fields(self, content_session):
        CategoryFactory(
            id="physics",
            name="Physics",
            description="Matter",
            banner_image_url="/banners/physics.png",
        )

        category = repository.fetch_categories(content_session)[0]

        assert category.description == "Matter"
        assert category.bannerImageUrl == "/banners/physics.png"
        assert category.parentId is None

    def test_returns_categories_with_stale_parents(self, content_session):
        CategoryFactory(id="orphan", name="Orphan", parent_id="deleted")

        categories = repository.fetch_categories(content_session)

        assert categories[0].parentId == "deleted"


class TestFetchContent:
    def test_articles_carry_category_and_flag(self, content_session):
        ArticleFactory(id="a1", category_id="physics", published=True)
        ArticleFactory(id="a2", category_id=None, published=False)

        items = repository.fetch_content(content_session, ContentKind.ARTICLE)

        assert items == [
            ArticleItem(id="a1", categoryId="physics", published=True),
            ArticleItem(id="a2", categoryId=None, published=False),
        ]

    def test_lectures_are_always_published(self, content_session):
        LectureFactory(id="l1", category_id="physics")

        items = repository.fetch_content(content_session, ContentKind.LECTURE)

        assert items == [LectureItem(id="l1", categoryId="physics", published=True)]

    def test_events_carry_event_date(self, content_session):
        event_date = datetime(2025, 5, 1, 18, 0)
        EventFactory(id="e1", event_date=event_date)

        items = repository.fetch_content(content_session, ContentKind.EVENT)

        assert items == [EventItem(id="e1", eventDate=event_date)]

    def test_fetch_all_content_covers_every_kind(self, content_session):
        ArticleFactory()
        LectureFactory()
        PresentationFactory()
        EventFactory()

        items = repository.fetch_all_content(content_session)

        assert sorted(item.kind.value for item in items) == [
            "article",
            "event",
            "lecture",
            "presentation",
        ]

    def test_lecture_visibility_ignores_published(self):
        lecture = LectureItem(id="l1", published=False)
        article = ArticleItem(id="a1", published=False)

        assert repository.VISIBILITY[ContentKind.LECTURE](lecture) is True
        assert repository.VISIBILITY[ContentKind.ARTICLE](article) is False


class TestCountUpcomingEvents:
    def test_counts_published_future_events(self, content_session):
        now = datetime(2025, 1, 1, 12, 0)
        EventFactory(event_date=now + timedelta(days=1))
        EventFactory(event_date=now)
        EventFactory(event_date=now - timedelta(days=1))
        EventFactory(event_date=now + timedelta(days=2), published=False)

        assert repository.count_upcoming_events(content_session, now) == 2

    def test_no_events(self, content_session):
        assert repository.count_upcoming_events(content_session, datetime.now()) == 0


class TestFetchFooterCategories:
    def test_newest_articles_limited_per_category(self, content_session):
        CategoryFactory(id="physics", name="Physics")
        for i in range(4):
            ArticleFactory(
                id=f"p{i}",
                category_id="physics",
                created_at=BASE_TIME + timedelta(days=i),
            )

        footer = repository.fetch_footer_categories(content_session, per_category=2)

        assert len(footer) == 1
        assert [a.id for a in footer[0].articles] == ["p3", "p2"]

    def test_skips_categories_without_published_articles(self, content_session):
        CategoryFactory(id="b", name="Biology")
        CategoryFactory(id="a", name="Astronomy")
        CategoryFactory(id="c", name="Chemistry")
        ArticleFactory(category_id="b")
        ArticleFactory(category_id="a")
        ArticleFactory(category_id="c", published=False)
        ArticleFactory(category_id=None)

        footer = repository.fetch_footer_categories(content_session, per_category=5)

        assert [c.name for c in footer] == ["Astronomy", "Biology"]

    def test_zero_limit_is_empty(self, content_session):
        CategoryFactory(id="physics")
        ArticleFactory(category_id="physics")

        assert repository.fetch_footer_categories(content_session, per_category=0) == []


class TestListCategories:
    def test_flat_listing_by_name(self, content_session):
        CategoryFactory(id="q", name="Quantum", parent_id="p", description="Small")
        CategoryFactory(id="p", name="Physics")

        listing = repository.list_categories(content_session)

        assert [c.id for c in listing] == ["p", "q"]
        assert listing[1].parentId == "p"
        assert listing[1].description == "Small"
