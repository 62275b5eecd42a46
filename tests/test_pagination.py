"""Pagination arithmetic and slicing against a real database."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from eventhub.crud import event_crud
from eventhub.models.event import Event
from eventhub.query.filters import EVENT_ORDERING, EventSearch
from eventhub.query.pagination import PageRequest, count_pages, paginate
from tests.factories import make_event


@pytest.mark.parametrize("total,limit,expected", [(0, 12, 0), (1, 12, 1), (12, 12, 1), (24, 12, 2), (25, 12, 3)])
def test_count_pages(total, limit, expected):
    assert count_pages(total, limit) == expected


@pytest.mark.asyncio
async def test_empty_result_has_zero_pages(db):
    page = await event_crud.search_events(db, EventSearch(), PageRequest(1, 12))
    assert page.items == []
    assert page.total == 0
    assert page.total_pages == 0
    assert page.per_page == 12


@pytest.mark.asyncio
async def test_pages_cover_every_row_exactly_once(db):
    base = datetime(2030, 1, 1, 18, 0)
    for i in range(23):
        # Several events share a start time so ordering needs the id tie-break
        await make_event(db, title=f"Event {i}", start_date=base + timedelta(days=i // 4))

    everything = (await db.execute(select(Event.id).order_by(*EVENT_ORDERING))).scalars().all()

    limit = 5
    first = await event_crud.search_events(db, EventSearch(), PageRequest(1, limit))
    collected = [event.id for event in first.items]
    for number in range(2, first.total_pages + 1):
        page = await event_crud.search_events(db, EventSearch(), PageRequest(number, limit))
        collected.extend(event.id for event in page.items)

    assert first.total_pages == 5
    assert collected == everything
    assert len(set(collected)) == 23


@pytest.mark.asyncio
async def test_same_page_twice_is_identical(db):
    start = datetime(2030, 6, 1, 20, 0)
    for i in range(10):
        await make_event(db, title=f"Same time {i}", start_date=start)

    stmt = select(Event).order_by(*EVENT_ORDERING)
    first = await paginate(db, stmt, PageRequest(2, 4))
    second = await paginate(db, stmt, PageRequest(2, 4))

    assert [e.id for e in first.items] == [e.id for e in second.items]
    assert first.total == 10
    assert first.total_pages == 3


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty(db):
    for i in range(3):
        await make_event(db, title=f"Event {i}")

    page = await event_crud.search_events(db, EventSearch(), PageRequest(5, 12))

    assert page.items == []
    assert page.total == 3
    assert page.total_pages == 1
