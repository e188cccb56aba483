"""
Guest, GuestFamily and GuestRequest models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy import orm

from app.core.db import Base

class Guest(Base):
    __tablename__ = "guests"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    label_id = Column(Integer, ForeignKey("labels.id"), nullable=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    category = Column(String(100), nullable=True)
    booking_ref = Column(String(50), unique=True, nullable=False, index=True)
    access_token = Column(String(128), unique=True, nullable=False, index=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, confirmed, declined
    allocated_seats = Column(Integer, default=1, nullable=False)
    confirmed_seats = Column(Integer, default=0, nullable=False)
    
    # Fixed travel details (read-only for the guest)
    arrival_date = Column(DateTime, nullable=True)
    departure_date = Column(DateTime, nullable=True)
    travel_mode = Column(String(50), nullable=True)
    host_covered_check_in = Column(DateTime, nullable=True)
    host_covered_check_out = Column(DateTime, nullable=True)
    
    # Bleisure extension, paid by the guest
    extended_check_in = Column(DateTime, nullable=True)
    extended_check_out = Column(DateTime, nullable=True)
    
    # ID verification
    id_document_url = Column(String(500), nullable=True)
    id_verified_name = Column(String(255), nullable=True)
    id_verification_status = Column(String(20), default="pending", nullable=False)  # pending, verified, failed
    
    self_manage_flights = Column(Boolean, default=False, nullable=False)
    self_manage_hotel = Column(Boolean, default=False, nullable=False)
    
    is_on_waitlist = Column(Boolean, default=False, nullable=False)
    waitlist_priority = Column(Integer, nullable=True)  # 1 = VIP, 2 = family, 3 = general
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    event = orm.relationship("Event", back_populates="guests")
    label = orm.relationship("Label", back_populates="guests")
    family = orm.relationship("GuestFamily", back_populates="guest", cascade="all, delete-orphan", order_by="GuestFamily.id")
    requests = orm.relationship("GuestRequest", back_populates="guest", cascade="all, delete-orphan")
    itinerary = orm.relationship("GuestItinerary", back_populates="guest", cascade="all, delete-orphan")

class GuestFamily(Base):
    __tablename__ = "guest_family"
    
    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    relationship = Column(String(100), nullable=False)
    age = Column(Integer, nullable=True)
    
    guest = orm.relationship("Guest", back_populates="family")

class GuestRequest(Base):
    __tablename__ = "guest_requests"
    
    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False, index=True)
    perk_id = Column(Integer, ForeignKey("perks.id"), nullable=True)
    type = Column(String(50), nullable=False)  # room_upgrade, perk_request, custom
    status = Column(String(30), default="pending", nullable=False)  # pending, approved, rejected, forwarded_to_client
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    guest = orm.relationship("Guest", back_populates="requests")
    perk = orm.relationship("Perk")
