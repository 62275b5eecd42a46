from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from eventhub.database import get_db
from eventhub.crud import ticket_crud
from eventhub.exceptions import UnexpectedError
from eventhub.models.user import User
from eventhub.schemas.tickets import TicketResponseSchema
from eventhub.auth.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tickets",
    tags=["Tickets"]
)


@router.get(
    "",
    response_model=List[TicketResponseSchema],
    summary="Tickets owned by the current user, with their events"
)
async def get_my_tickets(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        tickets = await ticket_crud.get_user_tickets(db, current_user.id)
    except Exception as e:
        logger.error(f"Error fetching tickets for current user_id {current_user.id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch tickets")
    return [TicketResponseSchema.from_joined(joined) for joined in tickets]
