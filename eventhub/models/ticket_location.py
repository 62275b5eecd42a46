from sqlalchemy import Column, Integer, String, DateTime
from eventhub.models import Base, utcnow


class TicketLocation(Base):
    __tablename__ = "ticket_locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)
