"""
RSVP and seat lifecycle

    pending   -> confirmed   seats = 1 + family members, at most allocated_seats
    confirmed -> confirmed   seat amendment, same rules
    any       -> declined    guest and all dependent rows are purged
"""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import CapacityExceededError
from app.models import Guest, GuestFamily
from app.schemas.guest import FamilyMemberCreate
from app.services.itinerary_service import ItineraryService

logger = logging.getLogger(__name__)

class RSVPService:
    """Confirmation status and seat allocation for guests"""

    @staticmethod
    def update_rsvp(
        db: Session,
        guest: Guest,
        status: str,
        family_members: List[FamilyMemberCreate]
    ) -> Dict:
        """Apply an RSVP answer and describe the outcome"""
        if status == "declined":
            guest_id = guest.id
            RSVPService.purge_guest(db, guest)
            logger.info(f"Guest {guest_id} declined and was removed from the guest list")
            return {
                "removed": True,
                "message": "Your response has been recorded. You have been removed from the guest list."
            }

        guest = RSVPService.confirm(db, guest, family_members)
        return {
            "removed": False,
            "message": f"RSVP confirmed for {guest.confirmed_seats} seat(s)",
            "guest": guest
        }

    @staticmethod
    def confirm(db: Session, guest: Guest, family_members: List[FamilyMemberCreate]) -> Guest:
        """Confirm or amend attendance, replacing the whole family list"""
        seats = 1 + len(family_members)
        if seats > guest.allocated_seats:
            logger.warning(f"Guest {guest.id} asked for {seats} seats, {guest.allocated_seats} allocated")
            raise CapacityExceededError(
                f"Cannot confirm {seats} seats. Only {guest.allocated_seats} allocated.",
                details={"requested_seats": seats, "allocated_seats": guest.allocated_seats}
            )

        db.query(GuestFamily).filter(GuestFamily.guest_id == guest.id).delete(synchronize_session=False)
        for member in family_members:
            db.add(GuestFamily(
                guest_id=guest.id,
                name=member.name,
                relationship=member.relationship,
                age=member.age
            ))

        guest.status = "confirmed"
        guest.confirmed_seats = seats
        db.commit()
        db.refresh(guest)

        logger.info(f"Guest {guest.id} confirmed {seats} seat(s)")
        return guest

    @staticmethod
    def purge_guest(db: Session, guest: Guest) -> None:
        """Hard-delete a guest with family, itinerary and requests.

        Seats held on itinerary events are released first so the attendee
        counters keep matching the registrations.
        """
        ItineraryService.release_guest_seats(db, guest)
        db.delete(guest)
        db.commit()
