from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from eventhub.database import get_db
from eventhub.crud import event_crud
from eventhub.exceptions import EventHubError, NotFoundError, UnexpectedError
from eventhub.models.user import User
from eventhub.query.params import parse_event_search, parse_page_request
from eventhub.schemas.event import (
    EventCreateSchema,
    EventUpdateSchema,
    EventResponseSchema,
    EventPageSchema
)
from eventhub.auth.dependencies import get_current_admin_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/events",
    tags=["Events"]
)


@router.get(
    "",
    response_model=EventPageSchema,
    summary="Search events with filtering and pagination (Public)"
)
async def search_events(
    db: AsyncSession = Depends(get_db),
    q: Optional[str] = None,
    category: Optional[str] = None,
    date: Optional[str] = None,
    location: Optional[str] = None,
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    page: Optional[str] = None,
    limit: Optional[str] = None
):
    search = parse_event_search(q=q, category=category, date=date, location=location, max_price=max_price)
    page_request = parse_page_request(page, limit)
    try:
        result = await event_crud.search_events(db, search, page_request)
    except Exception as e:
        logger.error(f"Error fetching events for {search}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch events")
    return EventPageSchema(
        events=[EventResponseSchema.model_validate(event) for event in result.items],
        total=result.total,
        total_pages=result.total_pages,
        per_page=result.per_page
    )


@router.get(
    "/featured",
    response_model=List[EventResponseSchema],
    summary="Get up to four upcoming featured events (Public)"
)
async def get_featured_events(db: AsyncSession = Depends(get_db)):
    try:
        return await event_crud.get_featured_events(db)
    except Exception as e:
        logger.error(f"Error fetching featured events: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch featured events")


@router.get(
    "/admin",
    response_model=List[EventResponseSchema],
    summary="List every event (Admin only)",
    dependencies=[Depends(get_current_admin_user)]
)
async def get_all_events_admin(db: AsyncSession = Depends(get_db)):
    try:
        return await event_crud.get_all_events(db)
    except Exception as e:
        logger.error(f"Error fetching admin events: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch events")


@router.get(
    "/{event_id}",
    response_model=EventResponseSchema,
    summary="Get a specific event by ID (Public)"
)
async def get_event_by_id(event_id: int, db: AsyncSession = Depends(get_db)):
    try:
        event = await event_crud.get_event_by_id(db, event_id)
    except Exception as e:
        logger.error(f"Error fetching event with id {event_id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch event")
    if event is None:
        raise NotFoundError("Event not found")
    return event


@router.post(
    "",
    response_model=EventResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new event (Admin only)"
)
async def create_event(
    event_data: EventCreateSchema,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    # A rollback expires current_user, so read its id up front.
    admin_id = current_user.id
    try:
        db_event = await event_crud.create_event(db, event_data, organizer_id=admin_id)
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Unexpected error creating event with title '{event_data.title}' by user ID {admin_id}: {str(e)}",
            exc_info=True
        )
        raise UnexpectedError("Failed to create event")
    logger.info(f"Event '{db_event.title}' (ID: {db_event.id}) created by user ID {admin_id}")
    return db_event


@router.patch(
    "/{event_id}",
    response_model=EventResponseSchema,
    summary="Partially update an event (Admin only)"
)
async def update_event(
    event_id: int,
    event_update_data: EventUpdateSchema,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    admin_id = current_user.id
    try:
        db_event = await event_crud.update_event(db, event_id, event_update_data)
    except EventHubError:
        await db.rollback()
        raise
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Unexpected error updating event id {event_id} with payload "
            f"{event_update_data.model_dump_json(exclude_unset=True)}: {str(e)}",
            exc_info=True
        )
        raise UnexpectedError("Failed to update event")
    if db_event is None:
        raise NotFoundError("Event not found")
    logger.info(f"Event ID {event_id} (title: '{db_event.title}') updated by user ID {admin_id}.")
    return db_event


@router.delete(
    "/{event_id}",
    summary="Delete an event (Admin only)"
)
async def delete_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    admin_id = current_user.id
    try:
        deleted = await event_crud.delete_event(db, event_id)
    except EventHubError as e:
        await db.rollback()
        logger.warning(f"Refused to delete event ID {event_id} for user ID {admin_id}: {e.message}")
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting event with id {event_id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to delete event")
    if not deleted:
        raise NotFoundError("Event not found")
    logger.info(f"Event ID {event_id} deleted successfully by user ID {admin_id}.")
    return {"message": "Event deleted successfully"}
