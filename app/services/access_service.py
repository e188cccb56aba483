"""
Guest identity and access gateway.

Guests never log in. The opaque access token in their portal link is the
only credential, and the booking reference is the only other identifier a
guest may present. Names and emails are never used to identify a guest.
"""

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models import Guest
from app.services.repositories import GuestRepo

logger = logging.getLogger(__name__)

class AccessService:
    """Resolves guest credentials to exactly one guest record"""
    
    @staticmethod
    def get_guest_by_token(db: Session, token: str) -> Guest:
        """Resolve a portal access token; unknown and malformed tokens fail alike"""
        guest = GuestRepo.get_by_access_token(db, token) if token else None
        if not guest:
            logger.warning("Rejected guest portal access with unknown token")
            raise NotFoundError("Invalid access token")
        return guest
    
    @staticmethod
    def get_guest_by_booking_ref(db: Session, booking_ref: str) -> Guest:
        """Resolve a booking reference, with the guest's event and label loaded"""
        guest = GuestRepo.get_by_booking_ref(db, booking_ref.strip()) if booking_ref else None
        if not guest:
            raise NotFoundError("Invitation not found")
        return guest
    
    @staticmethod
    def portal_url(guest: Guest) -> str:
        """Capability URL handed to the guest"""
        return f"{settings.BASE_URL}/guest/{guest.access_token}"
