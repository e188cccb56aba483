"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import reject_null

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str = Field(..., min_length=1, max_length=255)
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_published: bool = False

class EventUpdate(BaseModel):
    """Schema for updating an event"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_published: Optional[bool] = None
    
    @field_validator("name", "date", "location", "is_published")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    date: datetime
    location: str
    description: Optional[str] = None
    event_code: str
    is_published: bool
    created_at: datetime
    
    class Config:
        from_attributes = True

class EventDetail(EventResponse):
    """Detailed event response with counts"""
    total_guests: int
    confirmed_guests: int
    waitlisted_guests: int
    total_labels: int
    total_perks: int
