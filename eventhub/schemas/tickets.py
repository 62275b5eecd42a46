from datetime import datetime
from typing import Optional, TYPE_CHECKING

from eventhub.schemas.base import APISchema
from eventhub.schemas.event import EventResponseSchema

if TYPE_CHECKING:
    from eventhub.crud.ticket_crud import TicketWithEvent


class TicketSchema(APISchema):
    id: int
    user_id: str
    event_id: int
    type: str
    quantity: int
    order_number: str
    purchase_date: Optional[datetime] = None
    total_price: float


class TicketResponseSchema(TicketSchema):
    event: Optional[EventResponseSchema] = None

    @classmethod
    def from_joined(cls, joined: "TicketWithEvent") -> "TicketResponseSchema":
        ticket = TicketSchema.model_validate(joined.ticket)
        event = EventResponseSchema.model_validate(joined.event) if joined.event is not None else None
        return cls(**ticket.model_dump(), event=event)
