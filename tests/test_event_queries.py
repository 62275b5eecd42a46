"""Event search against the database with a fixed clock."""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio

from eventhub.crud import event_crud
from eventhub.models.event import EventCategory
from eventhub.query.filters import DateRange, EventSearch
from eventhub.query.pagination import PageRequest
from tests.factories import make_event

# Wednesday
NOW = datetime(2026, 10, 14, 10, 30)


async def titles(db, search: EventSearch) -> set:
    page = await event_crud.search_events(db, search, PageRequest(1, 100), now=NOW)
    return {event.title for event in page.items}


@pytest_asyncio.fixture
async def calendar(db):
    await make_event(db, title="This morning", start_date=NOW - timedelta(hours=2))
    await make_event(db, title="Tonight", start_date=datetime(2026, 10, 14, 21, 0))
    await make_event(db, title="Friday", start_date=datetime(2026, 10, 16, 19, 0))
    await make_event(db, title="Saturday", start_date=datetime(2026, 10, 17, 12, 0))
    await make_event(db, title="Sunday night", start_date=datetime(2026, 10, 18, 23, 30))
    await make_event(db, title="Next Monday", start_date=datetime(2026, 10, 19, 0, 0))
    await make_event(db, title="Late October", start_date=datetime(2026, 10, 30, 18, 0))
    await make_event(db, title="November", start_date=datetime(2026, 11, 1, 0, 0))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "bucket,expected",
    [
        (DateRange.today, {"Tonight"}),
        (DateRange.weekend, {"Saturday", "Sunday night"}),
        (DateRange.week, {"Tonight", "Friday", "Saturday", "Sunday night", "Next Monday"}),
        (DateRange.month, {"Tonight", "Friday", "Saturday", "Sunday night", "Next Monday", "Late October"}),
    ],
)
async def test_date_buckets(db, calendar, bucket, expected):
    assert await titles(db, EventSearch(date=bucket)) == expected


@pytest.mark.asyncio
async def test_keyword_matches_title_or_description_ignoring_case(db):
    await make_event(db, title="JAZZ Night", description="Standards")
    await make_event(db, title="Rock Night", description="With a jazz encore")
    await make_event(db, title="Poetry", description="Spoken word")

    assert await titles(db, EventSearch(query="jazz")) == {"JAZZ Night", "Rock Night"}


@pytest.mark.asyncio
async def test_keyword_wildcards_are_literal(db):
    await make_event(db, title="100% Fun")
    await make_event(db, title="1000 Fun")

    assert await titles(db, EventSearch(query="100%")) == {"100% Fun"}


@pytest.mark.asyncio
async def test_location_substring_ignoring_case(db):
    await make_event(db, title="A", location="Central Park, NYC")
    await make_event(db, title="B", location="Madison Square Garden")

    assert await titles(db, EventSearch(location="park")) == {"A"}


@pytest.mark.asyncio
async def test_max_price_is_strict_on_min_price(db):
    await make_event(db, title="Cheap", min_price=10, max_price=200)
    await make_event(db, title="Exact", min_price=50, max_price=50)
    await make_event(db, title="Pricey", min_price=80, max_price=120)

    assert await titles(db, EventSearch(max_price=50)) == {"Cheap"}


@pytest.mark.asyncio
async def test_adding_filters_never_grows_the_result(db, calendar):
    await make_event(db, title="Theater gala", category="theater", start_date=datetime(2026, 10, 17, 19, 0),
                     min_price=90, max_price=150, location="Opera House")

    base = EventSearch(query="a")
    extras = [
        EventSearch(query="a", category=EventCategory.theater),
        EventSearch(query="a", date=DateRange.weekend),
        EventSearch(query="a", location="house"),
        EventSearch(query="a", max_price=30),
    ]
    base_count = len(await titles(db, base))
    for narrowed in extras:
        assert len(await titles(db, narrowed)) <= base_count


@pytest.mark.asyncio
async def test_featured_events_are_upcoming_and_capped(db):
    for day in range(1, 7):
        await make_event(db, title=f"Featured {day}", featured=True, start_date=NOW + timedelta(days=day))
    await make_event(db, title="Over", featured=True,
                     start_date=NOW - timedelta(days=3), end_date=NOW - timedelta(days=2))
    await make_event(db, title="Plain", featured=False, start_date=NOW + timedelta(hours=1))

    featured = await event_crud.get_featured_events(db, now=NOW)

    assert [event.title for event in featured] == ["Featured 1", "Featured 2", "Featured 3", "Featured 4"]
