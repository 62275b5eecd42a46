from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from eventhub.models import Base, utcnow


class User(Base):
    __tablename__ = "users"

    # Issued by the identity provider (the token's ``sub`` claim)
    id = Column(String, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String, nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    organized_events = relationship("Event", back_populates="organizer")
    social_posts = relationship("SocialPost", back_populates="author")
    tickets = relationship("Ticket", back_populates="owner")
