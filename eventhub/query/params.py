"""Query-string parsing: raw strings in, typed search options out.

Sentinels such as ``"all"``/``"any"``, unknown enum values and malformed
numbers all collapse to ``None`` (no filter) or the default, never an error.
Categories must match exactly; date buckets and sort keys ignore case.
"""

import enum
import math
from typing import Optional, Type, TypeVar

from eventhub.models import fits_sql_int
from eventhub.models.event import EventCategory
from eventhub.query.filters import DateRange, EventSearch, PostSearch, PostSort
from eventhub.query.pagination import PageRequest

E = TypeVar("E", bound=enum.Enum)


def parse_text(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def parse_enum(enum_cls: Type[E], raw: Optional[str], *, ignore_case: bool = False) -> Optional[E]:
    value = parse_text(raw)
    if value is None:
        return None
    try:
        return enum_cls(value.lower() if ignore_case else value)
    except ValueError:
        return None


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a base-10 integer; anything a 64-bit column cannot hold is malformed."""
    value = parse_text(raw)
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if fits_sql_int(number) else None


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    value = parse_int(raw)
    return value if value is not None and value > 0 else None


def parse_float(raw: Optional[str]) -> Optional[float]:
    value = parse_text(raw)
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_page_request(page: Optional[str], limit: Optional[str]) -> PageRequest:
    return PageRequest.coerce(parse_int(page), parse_int(limit))


def parse_event_search(
    q: Optional[str] = None,
    category: Optional[str] = None,
    date: Optional[str] = None,
    location: Optional[str] = None,
    max_price: Optional[str] = None,
) -> EventSearch:
    return EventSearch(
        query=parse_text(q),
        category=parse_enum(EventCategory, category),
        date=parse_enum(DateRange, date, ignore_case=True),
        location=parse_text(location),
        max_price=parse_float(max_price),
    )


def parse_post_search(
    q: Optional[str] = None,
    event_id: Optional[str] = None,
    sort: Optional[str] = None,
) -> PostSearch:
    return PostSearch(
        query=parse_text(q),
        event_id=parse_positive_int(event_id),
        sort=parse_enum(PostSort, sort, ignore_case=True) or PostSort.recent,
    )
