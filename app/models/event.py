"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base

class Event(Base):
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_code = Column(String(50), unique=True, nullable=False, index=True)
    is_published = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    labels = relationship("Label", back_populates="event", cascade="all, delete-orphan")
    perks = relationship("Perk", back_populates="event", cascade="all, delete-orphan")
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    itinerary_events = relationship("ItineraryEvent", back_populates="event", cascade="all, delete-orphan")
