from typing import Annotated, Optional
from datetime import datetime
from pydantic import StringConstraints

from eventhub.schemas.base import APISchema

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class TicketLocationCreateSchema(APISchema):
    name: RequiredText
    address: RequiredText


class TicketLocationResponseSchema(APISchema):
    id: int
    name: str
    address: str
    created_at: Optional[datetime] = None
