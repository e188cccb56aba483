"""
Waitlist priority queue for oversubscribed resources such as hotel rooms.

Guests are ordered by tier (derived from their label name) and then by
insertion order. Positions are recomputed from the database on every call.
Two guests joining at the same moment may briefly be told the same
position; positions are advisory.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.models import Guest, Label
from app.schemas.guest import WaitlistEntry

logger = logging.getLogger(__name__)

TIER_VIP = 1
TIER_FAMILY = 2
TIER_GENERAL = 3

class WaitlistService:
    """Join, leave and rank guests on an event's waitlist"""

    @staticmethod
    def priority_for_label(label: Optional[Label]) -> int:
        if label is None:
            return TIER_GENERAL
        name = (label.name or "").lower()
        if "vip" in name:
            return TIER_VIP
        if "family" in name:
            return TIER_FAMILY
        return TIER_GENERAL

    @staticmethod
    def join(db: Session, guest: Guest) -> Tuple[Guest, int]:
        """Put the guest on the waitlist with a tier from their label"""
        priority = WaitlistService.priority_for_label(guest.label)
        guest.is_on_waitlist = True
        guest.waitlist_priority = priority
        db.commit()
        db.refresh(guest)

        position = WaitlistService.get_position(db, guest)
        logger.info(f"Guest {guest.id} joined waitlist of event {guest.event_id} at tier {priority}, position {position}")
        return guest, position

    @staticmethod
    def get_position(db: Session, guest: Guest) -> Optional[int]:
        """1-based position, or None if the guest is not waitlisted"""
        if not guest.is_on_waitlist:
            return None

        priority = guest.waitlist_priority or TIER_GENERAL

        ahead_by_tier = db.query(func.count(Guest.id)).filter(
            Guest.event_id == guest.event_id,
            Guest.is_on_waitlist == True,
            Guest.waitlist_priority < priority
        ).scalar()

        ahead_in_tier = db.query(func.count(Guest.id)).filter(
            Guest.event_id == guest.event_id,
            Guest.is_on_waitlist == True,
            Guest.waitlist_priority == priority,
            Guest.id < guest.id
        ).scalar()

        return (ahead_by_tier or 0) + (ahead_in_tier or 0) + 1

    @staticmethod
    def leave(db: Session, guest: Guest) -> Guest:
        guest.is_on_waitlist = False
        guest.waitlist_priority = None
        db.commit()
        db.refresh(guest)
        logger.info(f"Guest {guest.id} removed from waitlist of event {guest.event_id}")
        return guest

    @staticmethod
    def list_waitlist(db: Session, event_id: int) -> List[WaitlistEntry]:
        """Waitlisted guests of an event in queue order"""
        guests = db.query(Guest).options(joinedload(Guest.label)).filter(
            Guest.event_id == event_id,
            Guest.is_on_waitlist == True
        ).order_by(Guest.waitlist_priority, Guest.id).all()

        return [
            WaitlistEntry(
                guest_id=guest.id,
                name=guest.name,
                label_name=guest.label.name if guest.label else None,
                waitlist_priority=guest.waitlist_priority or TIER_GENERAL,
                position=index
            )
            for index, guest in enumerate(guests, start=1)
        ]
