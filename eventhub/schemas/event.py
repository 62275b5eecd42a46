from pydantic import Field, field_validator, model_validator
from datetime import datetime
from typing import Optional, List

from eventhub.models import SQL_INT_MAX, to_naive_utc
from eventhub.models.event import EventCategory, event_consistency_error
from eventhub.schemas.base import APISchema


class EventFieldsSchema(APISchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: str
    start_date: datetime
    end_date: datetime
    location: str = Field(..., min_length=1)
    image_url: str
    category: str
    min_price: float = Field(..., ge=0)
    max_price: float = Field(..., ge=0)
    tickets_total: int = Field(..., gt=0, le=SQL_INT_MAX)
    ticket_url: str
    featured: bool = False
    performers: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    age_restriction: Optional[str] = None
    accessibility: Optional[str] = None


class EventCreateSchema(EventFieldsSchema):
    # id, ticketsSold and organizerId are server-assigned; unknown keys are ignored
    category: EventCategory

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_consistency(self):
        error = event_consistency_error(
            self.start_date, self.end_date, self.min_price, self.max_price, self.tickets_total
        )
        if error:
            raise ValueError(error)
        return self


class EventUpdateSchema(APISchema):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    category: Optional[EventCategory] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    tickets_total: Optional[int] = Field(default=None, gt=0, le=SQL_INT_MAX)
    tickets_sold: Optional[int] = Field(default=None, ge=0, le=SQL_INT_MAX)
    ticket_url: Optional[str] = None
    featured: Optional[bool] = None
    performers: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    age_restriction: Optional[str] = None
    accessibility: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None


class EventResponseSchema(EventFieldsSchema):
    id: int
    tickets_sold: int
    organizer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EventPageSchema(APISchema):
    events: List[EventResponseSchema]
    total: int
    total_pages: int
    per_page: int
