"""
Itinerary models: scheduled activities of an event and guest registrations
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class ItineraryEvent(Base):
    __tablename__ = "itinerary_events"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    perk_id = Column(Integer, ForeignKey("perks.id"), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    is_mandatory = Column(Boolean, default=False, nullable=False)
    capacity = Column(Integer, nullable=True)  # None = unlimited
    current_attendees = Column(Integer, default=0, nullable=False)
    
    # Relationships
    event = relationship("Event", back_populates="itinerary_events")
    perk = relationship("Perk")
    registrations = relationship("GuestItinerary", back_populates="itinerary_event", cascade="all, delete-orphan")

class GuestItinerary(Base):
    __tablename__ = "guest_itinerary"
    
    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False, index=True)
    itinerary_event_id = Column(Integer, ForeignKey("itinerary_events.id"), nullable=False, index=True)
    status = Column(String(20), default="attending", nullable=False)  # attending, declined, waitlist
    
    guest = relationship("Guest", back_populates="itinerary")
    itinerary_event = relationship("ItineraryEvent", back_populates="registrations")
    
    __table_args__ = (
        UniqueConstraint("guest_id", "itinerary_event_id", name="uq_guest_itinerary"),
    )
