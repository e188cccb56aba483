"""
Guest portal API routes

Every route takes the guest's access token in the path and resolves it
before doing anything else; an unknown token is a 404.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models import Guest
from app.schemas.guest import (
    GuestResponse,
    FamilyMemberResponse,
    RSVPUpdate,
    BleisureUpdate,
    IDUpload,
    SelfManageUpdate,
    GuestRequestCreate,
    GuestRequestResponse,
)
from app.services.access_service import AccessService
from app.services.guest_service import GuestService
from app.services.itinerary_service import ItineraryService
from app.services.qr_service import QRService
from app.services.rsvp_service import RSVPService
from app.services.waitlist_service import WaitlistService
from app.utils.security import rate_limit_check, get_client_ip
from app.utils.responses import success_response, rate_limit_error

router = APIRouter()

def get_current_guest(token: str, db: Session = Depends(get_db)) -> Guest:
    """Resolve the path token to a guest"""
    return AccessService.get_guest_by_token(db, token)

def throttle_portal(request: Request):
    """Count every portal hit, including ones with unknown tokens"""
    if not rate_limit_check(get_client_ip(request), scope="portal"):
        rate_limit_error()

@router.get("/portal/{token}", dependencies=[Depends(throttle_portal)])
async def guest_portal(
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Full guest portal: invitation, perks, family, itinerary and waitlist"""
    portal = GuestService.build_portal(db, guest)
    return success_response(
        message="Guest portal loaded",
        data=portal
    )

@router.get("/{token}/qr.png")
async def guest_qr_code(guest: Guest = Depends(get_current_guest)):
    """QR code of the guest's portal link"""
    return Response(
        content=QRService.generate_guest_qr(guest),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=guest_{guest.booking_ref}.png"}
    )

@router.put("/{token}/rsvp")
async def update_rsvp(
    rsvp: RSVPUpdate,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Confirm (with family members) or decline the invitation"""
    result = RSVPService.update_rsvp(
        db=db,
        guest=guest,
        status=rsvp.status,
        family_members=rsvp.family_members
    )

    if result["removed"]:
        return success_response(
            message=result["message"],
            data={"removed": True}
        )

    confirmed = result["guest"]
    return success_response(
        message=result["message"],
        data={
            "removed": False,
            "guest": GuestResponse.model_validate(confirmed),
            "family": [FamilyMemberResponse.model_validate(m) for m in confirmed.family]
        }
    )

@router.put("/{token}/bleisure")
async def update_bleisure(
    dates: BleisureUpdate,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Set self-paid extension dates around the host-covered stay"""
    guest = GuestService.update_bleisure(
        db=db,
        guest=guest,
        extended_check_in=dates.extended_check_in,
        extended_check_out=dates.extended_check_out
    )
    return success_response(
        message="Travel dates updated",
        data=GuestResponse.model_validate(guest)
    )

@router.post("/{token}/upload-id")
async def upload_id(
    upload: IDUpload,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Record an ID document; a name mismatch is reported, not rejected"""
    result = GuestService.upload_id(
        db=db,
        guest=guest,
        document_url=upload.document_url,
        verified_name=upload.verified_name
    )
    return success_response(
        message=result["message"],
        data=result
    )

@router.put("/{token}/self-manage")
async def update_self_management(
    preferences: SelfManageUpdate,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Opt out of group flights or hotel"""
    guest = GuestService.update_self_management(
        db=db,
        guest=guest,
        self_manage_flights=preferences.self_manage_flights,
        self_manage_hotel=preferences.self_manage_hotel
    )
    return success_response(
        message="Preferences updated",
        data=GuestResponse.model_validate(guest)
    )

@router.post("/{token}/waitlist")
async def join_waitlist(
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Join the hotel waitlist"""
    guest, position = WaitlistService.join(db, guest)
    return success_response(
        message=f"You are number {position} on the waitlist",
        data={
            "position": position,
            "waitlist_priority": guest.waitlist_priority
        }
    )

@router.get("/{token}/waitlist")
async def waitlist_position(
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Current waitlist position, recomputed on every call"""
    position = WaitlistService.get_position(db, guest)
    return success_response(
        message="Waitlist position retrieved",
        data={
            "is_on_waitlist": guest.is_on_waitlist,
            "position": position,
            "waitlist_priority": guest.waitlist_priority
        }
    )

@router.get("/{token}/itinerary")
async def guest_itinerary(
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Event itinerary with the guest's registrations"""
    return success_response(
        message="Itinerary retrieved",
        data=ItineraryService.list_for_guest(db, guest)
    )

@router.post("/{token}/itinerary/{itinerary_event_id}/register")
async def register_for_itinerary_event(
    itinerary_event_id: int,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Register for an itinerary event"""
    result = ItineraryService.register(db, guest, itinerary_event_id)
    message = "Registered successfully"
    if result.conflicts:
        message = "Registered, but this overlaps with other events you are attending"
    return success_response(
        message=message,
        data=result
    )

@router.delete("/{token}/itinerary/{itinerary_event_id}/unregister")
async def unregister_from_itinerary_event(
    itinerary_event_id: int,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Unregister from an itinerary event; unregistering twice is harmless"""
    removed = ItineraryService.unregister(db, guest, itinerary_event_id)
    return success_response(
        message="Unregistered successfully" if removed else "You were not registered for this event",
        data={"removed": removed}
    )

@router.post("/{token}/request")
async def submit_request(
    request_data: GuestRequestCreate,
    guest: Guest = Depends(get_current_guest),
    db: Session = Depends(get_db)
):
    """Submit a request to the agent (room upgrade, extra perk...)"""
    request = GuestService.submit_request(db, guest, request_data)
    return success_response(
        message="Request submitted",
        data=GuestRequestResponse.model_validate(request),
        status_code=201
    )
