"""Search options and the predicate/ordering builders for events and social posts.

Options are plain frozen dataclasses with optional fields (``None`` means "no
filter").  ``event_clauses``/``post_clauses`` turn them into an immutable tuple
of typed clauses which ``combine`` ANDs together against a mapped class.
Clauses refer to columns by attribute name so they can be compared in tests.
"""

import calendar
import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, time
from typing import Any, Optional, Tuple, Union

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from eventhub.models.event import Event, EventCategory
from eventhub.models.social_post import SocialPost


class DateRange(str, enum.Enum):
    today = "today"
    weekend = "weekend"
    week = "week"
    month = "month"


class PostSort(str, enum.Enum):
    recent = "recent"
    popular = "popular"
    comments = "comments"


@dataclass(frozen=True)
class EventSearch:
    query: Optional[str] = None
    category: Optional[EventCategory] = None
    date: Optional[DateRange] = None
    location: Optional[str] = None
    max_price: Optional[float] = None


@dataclass(frozen=True)
class PostSearch:
    query: Optional[str] = None
    event_id: Optional[int] = None
    sort: PostSort = PostSort.recent


@dataclass(frozen=True)
class TextContains:
    """Case-insensitive substring match against any of ``fields``."""

    fields: Tuple[str, ...]
    needle: str

    def to_sql(self, model) -> ColumnElement:
        return or_(*(getattr(model, name).icontains(self.needle, autoescape=True) for name in self.fields))


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def to_sql(self, model) -> ColumnElement:
        return getattr(model, self.field) == self.value


@dataclass(frozen=True)
class LessThan:
    field: str
    bound: Any

    def to_sql(self, model) -> ColumnElement:
        return getattr(model, self.field) < self.bound


@dataclass(frozen=True)
class Within:
    """Half-open window: ``start <= field < end``."""

    field: str
    start: datetime
    end: datetime

    def to_sql(self, model) -> ColumnElement:
        column = getattr(model, self.field)
        return and_(column >= self.start, column < self.end)


Clause = Union[TextContains, Equals, LessThan, Within]


def date_window(bucket: DateRange, now: datetime) -> Tuple[datetime, datetime]:
    today = now.date()
    if bucket is DateRange.today:
        return now, datetime.combine(today, time(23, 59, 59, 999000))
    if bucket is DateRange.weekend:
        weekday = today.weekday()
        start_day = today if weekday >= 5 else today + timedelta(days=5 - weekday)
        monday = start_day + timedelta(days=7 - start_day.weekday())
        return datetime.combine(start_day, time.min), datetime.combine(monday, time.min)
    if bucket is DateRange.week:
        return now, now + timedelta(days=7)
    if bucket is DateRange.month:
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        first_of_next = today.replace(day=1) + timedelta(days=days_in_month)
        return now, datetime.combine(first_of_next, time.min)
    raise ValueError(f"Unknown date range: {bucket!r}")


def event_clauses(search: EventSearch, now: datetime) -> Tuple[Clause, ...]:
    clauses = []
    if search.query:
        clauses.append(TextContains(("title", "description"), search.query))
    if search.category is not None:
        clauses.append(Equals("category", search.category.value))
    if search.location:
        clauses.append(TextContains(("location",), search.location))
    if search.max_price is not None:
        # Only the lower bound of the event's price range is compared
        clauses.append(LessThan("min_price", search.max_price))
    if search.date is not None:
        start, end = date_window(search.date, now)
        clauses.append(Within("start_date", start, end))
    return tuple(clauses)


def post_clauses(search: PostSearch) -> Tuple[Clause, ...]:
    clauses = []
    if search.query:
        clauses.append(TextContains(("content",), search.query))
    if search.event_id is not None:
        clauses.append(Equals("event_id", search.event_id))
    return tuple(clauses)


def combine(clauses: Tuple[Clause, ...], model) -> ColumnElement:
    if not clauses:
        return true()
    return and_(*(clause.to_sql(model) for clause in clauses))


EVENT_ORDERING = (Event.start_date.desc(), Event.id.desc())

_POST_SORT_KEYS = {
    PostSort.recent: SocialPost.created_at,
    PostSort.popular: SocialPost.likes,
    PostSort.comments: SocialPost.comments,
}


def post_ordering(sort: PostSort) -> tuple:
    return (_POST_SORT_KEYS[sort].desc(), SocialPost.id.desc())
