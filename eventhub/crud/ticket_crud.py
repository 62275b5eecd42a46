from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models.event import Event
from eventhub.models.tickets import Ticket


@dataclass(frozen=True)
class TicketWithEvent:
    ticket: Ticket
    event: Optional[Event]


async def get_user_tickets(db: AsyncSession, user_id: str) -> List[TicketWithEvent]:
    result = await db.execute(
        select(Ticket, Event)
        .outerjoin(Event, Ticket.event_id == Event.id)
        .where(Ticket.user_id == user_id)
        .order_by(Event.start_date.desc(), Ticket.id.desc())
    )
    return [TicketWithEvent(ticket=ticket, event=event) for ticket, event in result.all()]
