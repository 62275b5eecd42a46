import math
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config import settings
from eventhub.models import SQL_INT_MAX

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def coerce(
        cls,
        page: Optional[int],
        limit: Optional[int],
        *,
        default_limit: Optional[int] = None,
        max_limit: Optional[int] = None,
    ) -> "PageRequest":
        default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
        max_limit = max_limit or settings.MAX_PAGE_SIZE
        page = page if page is not None and page >= 1 else 1
        limit = limit if limit is not None and limit >= 1 else default_limit
        limit = min(limit, max_limit)
        # Keep the offset inside a signed 64-bit OFFSET clause
        page = min(page, SQL_INT_MAX // limit + 1)
        return cls(page=page, limit=limit)


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    total_pages: int
    per_page: int


def count_pages(total: int, limit: int) -> int:
    # No rows means no pages
    return math.ceil(total / limit) if total > 0 else 0


def _first_column(row: Row):
    return row[0]


async def paginate(
    db: AsyncSession,
    stmt: Select,
    request: PageRequest,
    transform: Callable[[Row], T] = _first_column,
) -> Page[T]:
    """Count every row ``stmt`` matches, then fetch one ordered slice of it.

    ``stmt`` must already carry its WHERE clause and a total ordering.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    result = await db.execute(stmt.offset(request.offset).limit(request.limit))
    items = [transform(row) for row in result.all()]
    return Page(
        items=items,
        total=total,
        total_pages=count_pages(total, request.limit),
        per_page=request.limit,
    )
