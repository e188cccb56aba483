"""
Itinerary Pydantic schemas
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.common import reject_null

class ItineraryEventCreate(BaseModel):
    """Schema for creating an itinerary event"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    is_mandatory: bool = False
    capacity: Optional[int] = Field(None, ge=0)
    perk_id: Optional[int] = None
    
    @model_validator(mode="after")
    def check_times(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self

class ItineraryEventUpdate(BaseModel):
    """Schema for updating an itinerary event"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_mandatory: Optional[bool] = None
    capacity: Optional[int] = Field(None, ge=0)
    perk_id: Optional[int] = None
    
    @field_validator("title", "start_time", "is_mandatory")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class ItineraryEventResponse(BaseModel):
    id: int
    event_id: int
    perk_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    is_mandatory: bool
    capacity: Optional[int] = None
    current_attendees: int
    
    class Config:
        from_attributes = True

class GuestItineraryEntry(ItineraryEventResponse):
    """Itinerary event as seen by one guest"""
    registered: bool
    has_conflict: bool

class RegistrationResult(BaseModel):
    itinerary_event: ItineraryEventResponse
    conflicts: List[ItineraryEventResponse]
