from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.exceptions import ConflictError, ValidationError
from eventhub.models import fits_sql_int, utcnow
from eventhub.models.event import Event, event_consistency_error
from eventhub.models.social_post import SocialPost
from eventhub.models.tickets import Ticket
from eventhub.query.filters import EVENT_ORDERING, EventSearch, combine, event_clauses
from eventhub.query.pagination import Page, PageRequest, paginate
from eventhub.schemas.event import EventCreateSchema, EventUpdateSchema

FEATURED_LIMIT = 4


async def search_events(
    db: AsyncSession,
    search: EventSearch,
    page: PageRequest,
    now: Optional[datetime] = None,
) -> Page[Event]:
    where = combine(event_clauses(search, now or utcnow()), Event)
    stmt = select(Event).where(where).order_by(*EVENT_ORDERING)
    return await paginate(db, stmt, page)


async def get_featured_events(db: AsyncSession, now: Optional[datetime] = None) -> List[Event]:
    result = await db.execute(
        select(Event)
        .where(Event.featured.is_(True), Event.end_date >= (now or utcnow()))
        .order_by(Event.start_date.asc(), Event.id.asc())
        .limit(FEATURED_LIMIT)
    )
    return result.scalars().all()


async def get_all_events(db: AsyncSession) -> List[Event]:
    result = await db.execute(select(Event).order_by(*EVENT_ORDERING))
    return result.scalars().all()


async def get_event_by_id(db: AsyncSession, event_id: int) -> Event | None:
    # Ids outside the column range cannot exist
    if not fits_sql_int(event_id):
        return None
    return await db.get(Event, event_id)


async def create_event(db: AsyncSession, event_in: EventCreateSchema, organizer_id: Optional[str]) -> Event:
    data = event_in.model_dump()
    data["category"] = event_in.category.value
    db_event = Event(**data, organizer_id=organizer_id, tickets_sold=0)
    db.add(db_event)
    await db.commit()
    await db.refresh(db_event)
    return db_event


async def update_event(db: AsyncSession, event_id: int, event_in: EventUpdateSchema) -> Event | None:
    db_event = await get_event_by_id(db, event_id)
    if db_event is None:
        return None

    update_data = event_in.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No fields provided for update.")
    if update_data.get("category") is not None:
        update_data["category"] = event_in.category.value

    # Nullable only at the API boundary; the columns themselves are required
    required = {"title", "description", "start_date", "end_date", "location", "image_url", "category",
                "min_price", "max_price", "tickets_total", "tickets_sold", "ticket_url", "featured"}
    missing = sorted(key for key in required & update_data.keys() if update_data[key] is None)
    if missing:
        raise ValidationError(f"Fields cannot be null: {', '.join(missing)}")

    merged = {
        key: update_data.get(key, getattr(db_event, key))
        for key in ("start_date", "end_date", "min_price", "max_price", "tickets_total", "tickets_sold")
    }
    error = event_consistency_error(**merged)
    if error:
        raise ValidationError(error)

    for key, value in update_data.items():
        setattr(db_event, key, value)
    await db.commit()
    await db.refresh(db_event)
    return db_event


async def count_event_tickets(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(select(func.count()).select_from(Ticket).where(Ticket.event_id == event_id))
    return result.scalar_one()


async def delete_event(db: AsyncSession, event_id: int) -> bool:
    """Delete an event, detaching its social posts.

    Refuses with ``ConflictError`` while tickets still reference the event.
    """
    db_event = await get_event_by_id(db, event_id)
    if db_event is None:
        return False

    ticket_count = await count_event_tickets(db, event_id)
    if ticket_count:
        raise ConflictError(
            f"Cannot delete event {event_id}: {ticket_count} ticket(s) reference it."
        )

    await db.execute(update(SocialPost).where(SocialPost.event_id == event_id).values(event_id=None))
    await db.delete(db_event)
    await db.commit()
    return True
