"""
Guest self-service operations and guest-facing views
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.models import Guest, GuestRequest
from app.schemas.event import EventResponse
from app.schemas.guest import (
    GuestResponse,
    GuestInvitation,
    GuestPortal,
    FamilyMemberResponse,
    GuestRequestCreate,
)
from app.schemas.label import LabelResponse
from app.services.access_service import AccessService
from app.services.entitlement_service import EntitlementService
from app.services.itinerary_service import ItineraryService
from app.services.repositories import PerkRepo
from app.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)

class GuestService:
    """Operations a guest performs on their own record"""

    @staticmethod
    def build_invitation(db: Session, guest: Guest) -> GuestInvitation:
        """Guest with event, label, family and entitlements"""
        return GuestInvitation(
            **GuestResponse.model_validate(guest).model_dump(),
            event=EventResponse.model_validate(guest.event),
            label=LabelResponse.model_validate(guest.label) if guest.label else None,
            family=[FamilyMemberResponse.model_validate(member) for member in guest.family],
            available_perks=EntitlementService.get_available_perks(db, guest)
        )

    @staticmethod
    def build_portal(db: Session, guest: Guest) -> GuestPortal:
        """Everything the guest portal needs, recomputed from the store"""
        invitation = GuestService.build_invitation(db, guest)
        return GuestPortal(
            **invitation.model_dump(),
            itinerary=ItineraryService.list_for_guest(db, guest),
            waitlist_position=WaitlistService.get_position(db, guest),
            portal_url=AccessService.portal_url(guest)
        )

    @staticmethod
    def update_bleisure(
        db: Session,
        guest: Guest,
        extended_check_in: Optional[datetime],
        extended_check_out: Optional[datetime]
    ) -> Guest:
        """Store self-paid extension dates outside the host-covered window"""
        if extended_check_in and guest.host_covered_check_in:
            if extended_check_in >= guest.host_covered_check_in:
                raise ValidationError("Extended check-in must be before host-covered dates")

        if extended_check_out and guest.host_covered_check_out:
            if extended_check_out <= guest.host_covered_check_out:
                raise ValidationError("Extended check-out must be after host-covered dates")

        if extended_check_in and extended_check_out and extended_check_in >= extended_check_out:
            raise ValidationError("Extended check-in must be before extended check-out")

        guest.extended_check_in = extended_check_in
        guest.extended_check_out = extended_check_out
        db.commit()
        db.refresh(guest)

        logger.info(f"Guest {guest.id} updated bleisure dates")
        return guest

    @staticmethod
    def upload_id(db: Session, guest: Guest, document_url: str, verified_name: str) -> Dict:
        """Record an ID document; the name on it must match the guest name"""
        name_match = verified_name.strip().lower() == guest.name.strip().lower()

        guest.id_document_url = document_url
        guest.id_verified_name = verified_name
        guest.id_verification_status = "verified" if name_match else "failed"
        db.commit()
        db.refresh(guest)

        if not name_match:
            logger.warning(f"ID verification failed for guest {guest.id}: name mismatch")

        return {
            "success": name_match,
            "message": "ID verified successfully" if name_match else "Name mismatch - verification failed",
            "id_verification_status": guest.id_verification_status
        }

    @staticmethod
    def update_self_management(
        db: Session,
        guest: Guest,
        self_manage_flights: Optional[bool],
        self_manage_hotel: Optional[bool]
    ) -> Guest:
        """Opt in or out of group flights and hotel; only given flags change"""
        if self_manage_flights is not None:
            guest.self_manage_flights = self_manage_flights
        if self_manage_hotel is not None:
            guest.self_manage_hotel = self_manage_hotel
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def submit_request(db: Session, guest: Guest, request_data: GuestRequestCreate) -> GuestRequest:
        """Ad-hoc ask outside the entitlement flow, reviewed by the agent"""
        if request_data.perk_id is not None:
            perk = PerkRepo.get_by_id(db, request_data.perk_id)
            if not perk or perk.event_id != guest.event_id:
                raise ValidationError("Perk does not belong to this event")

        request = GuestRequest(
            guest_id=guest.id,
            perk_id=request_data.perk_id,
            type=request_data.type,
            notes=request_data.notes,
            status="pending"
        )
        db.add(request)
        db.commit()
        db.refresh(request)

        logger.info(f"Guest {guest.id} submitted {request.type} request {request.id}")
        return request
