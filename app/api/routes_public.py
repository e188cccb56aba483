"""
Public API routes - no authentication required
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.exceptions import NotFoundError, ValidationError
from app.services.access_service import AccessService
from app.services.guest_service import GuestService
from app.services.qr_service import QRService
from app.services.repositories import EventRepo
from app.utils.security import rate_limit_check, get_client_ip
from app.utils.responses import success_response, rate_limit_error

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/lookup")
async def lookup_invitation(
    request: Request,
    ref: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """Look up an invitation by booking reference"""
    # Booking references are short, so guessing them is throttled
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip, scope="lookup"):
        return rate_limit_error()

    if not ref or not ref.strip():
        raise ValidationError("Booking reference required")

    guest = AccessService.get_guest_by_booking_ref(db, ref)
    invitation = GuestService.build_invitation(db, guest)

    return success_response(
        message="Invitation found",
        data=invitation
    )

@router.get("/events/{event_code}/qr.png")
async def get_event_qr_code(
    event_code: str,
    db: Session = Depends(get_db)
):
    """QR code for a published event's lookup page"""
    event = EventRepo.get_by_code(db, event_code)
    if not event or not event.is_published:
        raise NotFoundError("Event not found")

    return Response(
        content=QRService.generate_event_qr(event.event_code),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{event.event_code}.png"}
    )
