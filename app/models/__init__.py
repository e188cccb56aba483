"""
Database models package
"""

from .event import Event
from .label import Label, LabelPerk
from .perk import Perk
from .guest import Guest, GuestFamily, GuestRequest
from .itinerary import ItineraryEvent, GuestItinerary

__all__ = [
    "Event",
    "Label",
    "LabelPerk",
    "Perk",
    "Guest",
    "GuestFamily",
    "GuestRequest",
    "ItineraryEvent",
    "GuestItinerary",
]
