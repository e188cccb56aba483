"""
Guest-related Pydantic schemas
"""

from datetime import datetime, timezone
from typing import Optional, List, Literal
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import reject_null
from app.schemas.event import EventResponse
from app.schemas.label import LabelResponse, AvailablePerk
from app.schemas.itinerary import GuestItineraryEntry

class FamilyMemberCreate(BaseModel):
    """Family member travelling under a guest's allocation"""
    name: str = Field(..., min_length=1, max_length=255)
    relationship: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=130)

class FamilyMemberResponse(BaseModel):
    id: int
    guest_id: int
    name: str
    relationship: str
    age: Optional[int] = None
    
    class Config:
        from_attributes = True

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = None
    category: Optional[str] = None
    label_id: Optional[int] = None
    allocated_seats: int = Field(1, ge=1)
    arrival_date: Optional[datetime] = None
    departure_date: Optional[datetime] = None
    travel_mode: Optional[str] = None
    host_covered_check_in: Optional[datetime] = None
    host_covered_check_out: Optional[datetime] = None

class GuestUpdate(BaseModel):
    """Schema for agent edits of a guest"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    category: Optional[str] = None
    label_id: Optional[int] = None
    allocated_seats: Optional[int] = Field(None, ge=1)
    arrival_date: Optional[datetime] = None
    departure_date: Optional[datetime] = None
    travel_mode: Optional[str] = None
    host_covered_check_in: Optional[datetime] = None
    host_covered_check_out: Optional[datetime] = None

    @field_validator("name", "email", "allocated_seats")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class GuestResponse(BaseModel):
    """Guest response schema"""
    id: int
    event_id: int
    label_id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    category: Optional[str] = None
    booking_ref: str
    status: str
    allocated_seats: int
    confirmed_seats: int
    arrival_date: Optional[datetime] = None
    departure_date: Optional[datetime] = None
    travel_mode: Optional[str] = None
    host_covered_check_in: Optional[datetime] = None
    host_covered_check_out: Optional[datetime] = None
    extended_check_in: Optional[datetime] = None
    extended_check_out: Optional[datetime] = None
    id_verification_status: str
    self_manage_flights: bool
    self_manage_hotel: bool
    is_on_waitlist: bool
    waitlist_priority: Optional[int] = None
    
    class Config:
        from_attributes = True

class GuestInvitation(GuestResponse):
    """Guest resolved by booking reference"""
    event: EventResponse
    label: Optional[LabelResponse] = None
    family: List[FamilyMemberResponse]
    available_perks: List[AvailablePerk]

class GuestPortal(GuestInvitation):
    """Everything the guest portal shows for one access token"""
    itinerary: List[GuestItineraryEntry]
    waitlist_position: Optional[int] = None
    portal_url: str

class RSVPUpdate(BaseModel):
    status: Literal["confirmed", "declined"]
    family_members: List[FamilyMemberCreate] = []

class BleisureUpdate(BaseModel):
    extended_check_in: Optional[datetime] = None
    extended_check_out: Optional[datetime] = None

    @field_validator("extended_check_in", "extended_check_out")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Stored datetimes are naive UTC
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

class IDUpload(BaseModel):
    document_url: str = Field(..., min_length=1, max_length=500)
    verified_name: str = Field(..., min_length=1, max_length=255)

class SelfManageUpdate(BaseModel):
    self_manage_flights: Optional[bool] = None
    self_manage_hotel: Optional[bool] = None

class GuestRequestCreate(BaseModel):
    type: str = Field("room_upgrade", min_length=1, max_length=50)
    notes: Optional[str] = None
    perk_id: Optional[int] = None

class GuestRequestUpdate(BaseModel):
    status: Literal["pending", "approved", "rejected", "forwarded_to_client"]
    notes: Optional[str] = None

class GuestRequestResponse(BaseModel):
    id: int
    guest_id: int
    perk_id: Optional[int] = None
    type: str
    status: str
    notes: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

class WaitlistEntry(BaseModel):
    guest_id: int
    name: str
    label_name: Optional[str] = None
    waitlist_priority: int
    position: int
