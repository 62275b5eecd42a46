from sqlalchemy import Column, Integer, String, Text, DateTime, Float, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship
from eventhub.models import Base, utcnow
from datetime import datetime
from typing import Optional
import enum


class EventCategory(str, enum.Enum):
    music = "music"
    theater = "theater"
    festival = "festival"
    conference = "conference"
    workshop = "workshop"
    other = "other"


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    location = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    min_price = Column(Float, nullable=False)
    max_price = Column(Float, nullable=False)
    tickets_total = Column(Integer, nullable=False)
    tickets_sold = Column(Integer, nullable=False, default=0)
    ticket_url = Column(String, nullable=False)
    featured = Column(Boolean, nullable=False, default=False)
    organizer_id = Column(String, ForeignKey("users.id"), nullable=True)
    performers = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)
    age_restriction = Column(String, nullable=True)
    accessibility = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    organizer = relationship("User", back_populates="organized_events")
    social_posts = relationship("SocialPost", back_populates="event", passive_deletes=True)
    tickets = relationship("Ticket", back_populates="event", passive_deletes=True)


def event_consistency_error(
    start_date: datetime,
    end_date: datetime,
    min_price: float,
    max_price: float,
    tickets_total: int,
    tickets_sold: int = 0,
) -> Optional[str]:
    """Return a message describing the first broken event invariant, or None."""
    if end_date < start_date:
        return "endDate must not be before startDate"
    if min_price > max_price:
        return "minPrice must not exceed maxPrice"
    if tickets_total <= 0:
        return "ticketsTotal must be positive"
    if tickets_sold < 0 or tickets_sold > tickets_total:
        return "ticketsSold must be between 0 and ticketsTotal"
    return None
