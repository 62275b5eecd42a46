from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from eventhub.models import Base, utcnow


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False)
    type = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    order_number = Column(String, nullable=False, unique=True)
    purchase_date = Column(DateTime, default=utcnow)
    total_price = Column(Float, nullable=False)

    owner = relationship("User", back_populates="tickets")
    event = relationship("Event", back_populates="tickets")
