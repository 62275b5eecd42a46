from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from eventhub.database import get_db
from eventhub.crud import ticket_location_crud
from eventhub.exceptions import NotFoundError, UnexpectedError
from eventhub.models.user import User
from eventhub.schemas.ticket_location import TicketLocationCreateSchema, TicketLocationResponseSchema
from eventhub.auth.dependencies import get_current_admin_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/ticket-locations",
    tags=["Ticket Locations"]
)


@router.get(
    "",
    response_model=List[TicketLocationResponseSchema],
    summary="List ticket sale locations by name (Public)"
)
async def get_ticket_locations(db: AsyncSession = Depends(get_db)):
    try:
        return await ticket_location_crud.get_ticket_locations(db)
    except Exception as e:
        logger.error(f"Error fetching ticket locations: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch ticket locations")


@router.post(
    "",
    response_model=TicketLocationResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a ticket sale location (Admin only)"
)
async def create_ticket_location(
    location_data: TicketLocationCreateSchema,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    admin_id = current_user.id
    try:
        db_location = await ticket_location_crud.create_ticket_location(db, location_data)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error creating ticket location '{location_data.name}': {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to create ticket location")
    logger.info(f"Ticket location '{db_location.name}' (ID: {db_location.id}) created by user ID {admin_id}")
    return db_location


@router.delete(
    "/{location_id}",
    summary="Delete a ticket sale location (Admin only)"
)
async def delete_ticket_location(
    location_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    admin_id = current_user.id
    try:
        deleted = await ticket_location_crud.delete_ticket_location(db, location_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting ticket location ID {location_id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to delete ticket location")
    if not deleted:
        raise NotFoundError("Ticket location not found")
    logger.info(f"Ticket location ID {location_id} deleted by user ID {admin_id}")
    return {"message": "Ticket location deleted successfully"}
