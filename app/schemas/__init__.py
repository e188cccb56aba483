"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .label import *
from .itinerary import *
from .guest import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventDetail",
    "LabelCreate",
    "LabelUpdate",
    "LabelResponse",
    "PerkCreate",
    "PerkUpdate",
    "PerkResponse",
    "LabelPerkUpdate",
    "LabelPerkResponse",
    "AvailablePerk",
    "ItineraryEventCreate",
    "ItineraryEventUpdate",
    "ItineraryEventResponse",
    "GuestItineraryEntry",
    "RegistrationResult",
    "FamilyMemberCreate",
    "FamilyMemberResponse",
    "GuestCreate",
    "GuestUpdate",
    "GuestResponse",
    "GuestInvitation",
    "GuestPortal",
    "RSVPUpdate",
    "BleisureUpdate",
    "IDUpload",
    "SelfManageUpdate",
    "GuestRequestCreate",
    "GuestRequestUpdate",
    "GuestRequestResponse",
    "WaitlistEntry",
]
