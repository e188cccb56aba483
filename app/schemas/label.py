"""
Label, Perk and entitlement matrix schemas
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import reject_null

class LabelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class LabelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class LabelResponse(BaseModel):
    id: int
    event_id: int
    name: str
    description: Optional[str] = None
    
    class Config:
        from_attributes = True

class PerkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=50)  # transport, accommodation, meal, activity

class PerkUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("name", "type")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class PerkResponse(BaseModel):
    id: int
    event_id: int
    name: str
    description: Optional[str] = None
    type: str
    
    class Config:
        from_attributes = True

class LabelPerkUpdate(BaseModel):
    """Upsert payload for one cell of the entitlement matrix"""
    is_enabled: Optional[bool] = None
    expense_handled_by_client: Optional[bool] = None

class LabelPerkResponse(BaseModel):
    id: int
    label_id: int
    perk_id: int
    is_enabled: bool
    expense_handled_by_client: bool
    perk: Optional[PerkResponse] = None
    
    class Config:
        from_attributes = True

class AvailablePerk(PerkResponse):
    """A perk resolved for a guest, with its expense attribution"""
    is_enabled: bool
    expense_handled_by_client: bool
