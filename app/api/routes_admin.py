"""
Agent API routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models import Guest
from app.schemas.event import EventCreate, EventUpdate, EventResponse, EventDetail
from app.schemas.guest import (
    GuestCreate,
    GuestUpdate,
    GuestResponse,
    FamilyMemberCreate,
    FamilyMemberResponse,
    GuestRequestUpdate,
    GuestRequestResponse,
)
from app.schemas.itinerary import ItineraryEventCreate, ItineraryEventUpdate, ItineraryEventResponse
from app.schemas.label import (
    LabelCreate,
    LabelUpdate,
    LabelResponse,
    PerkCreate,
    PerkUpdate,
    PerkResponse,
    LabelPerkUpdate,
    LabelPerkResponse,
)
from app.services.access_service import AccessService
from app.services.admin_service import AdminService
from app.services.entitlement_service import EntitlementService
from app.services.repositories import EventRepo, LabelRepo, PerkRepo, ItineraryRepo
from app.services.waitlist_service import WaitlistService
from app.utils.security import verify_admin_token
from app.utils.responses import success_response

router = APIRouter(dependencies=[Depends(verify_admin_token)])

def guest_payload(guest: Guest) -> dict:
    """Agent view of a guest, including the portal link to send out"""
    data = GuestResponse.model_validate(guest).model_dump()
    data["portal_url"] = AccessService.portal_url(guest)
    return data

# -------- Events --------

@router.get("/events")
async def list_events(db: Session = Depends(get_db)):
    """List all events"""
    events = AdminService.list_events(db)
    return success_response(
        message="Events retrieved",
        data=[EventResponse.model_validate(event) for event in events]
    )

@router.post("/events")
async def create_event(event_data: EventCreate, db: Session = Depends(get_db)):
    """Create a new event"""
    event = AdminService.create_event(db, event_data)
    return success_response(
        message="Event created successfully",
        data=EventResponse.model_validate(event),
        status_code=201
    )

@router.get("/events/{event_id}")
async def get_event_details(event_id: int, db: Session = Depends(get_db)):
    """Get detailed event information"""
    stats = AdminService.event_statistics(db, event_id)
    event = stats.pop("event")
    return success_response(
        message="Event details retrieved",
        data=EventDetail(
            **EventResponse.model_validate(event).model_dump(),
            **stats
        )
    )

@router.put("/events/{event_id}")
async def update_event(event_id: int, event_update: EventUpdate, db: Session = Depends(get_db)):
    """Update an event"""
    event = AdminService.update_event(db, event_id, event_update)
    return success_response(
        message="Event updated successfully",
        data=EventResponse.model_validate(event)
    )

# -------- Labels --------

@router.get("/events/{event_id}/labels")
async def list_labels(event_id: int, db: Session = Depends(get_db)):
    EventRepo.require(db, event_id)
    labels = LabelRepo.list_for_event(db, event_id)
    return success_response(
        message="Labels retrieved",
        data=[LabelResponse.model_validate(label) for label in labels]
    )

@router.post("/events/{event_id}/labels")
async def create_label(event_id: int, label_data: LabelCreate, db: Session = Depends(get_db)):
    label = AdminService.create_label(db, event_id, label_data)
    return success_response(
        message="Label created successfully",
        data=LabelResponse.model_validate(label),
        status_code=201
    )

@router.put("/labels/{label_id}")
async def update_label(label_id: int, label_update: LabelUpdate, db: Session = Depends(get_db)):
    label = AdminService.update_label(db, label_id, label_update)
    return success_response(
        message="Label updated successfully",
        data=LabelResponse.model_validate(label)
    )

# -------- Perks --------

@router.get("/events/{event_id}/perks")
async def list_perks(event_id: int, db: Session = Depends(get_db)):
    EventRepo.require(db, event_id)
    perks = PerkRepo.list_for_event(db, event_id)
    return success_response(
        message="Perks retrieved",
        data=[PerkResponse.model_validate(perk) for perk in perks]
    )

@router.post("/events/{event_id}/perks")
async def create_perk(event_id: int, perk_data: PerkCreate, db: Session = Depends(get_db)):
    perk = AdminService.create_perk(db, event_id, perk_data)
    return success_response(
        message="Perk created successfully",
        data=PerkResponse.model_validate(perk),
        status_code=201
    )

@router.put("/perks/{perk_id}")
async def update_perk(perk_id: int, perk_update: PerkUpdate, db: Session = Depends(get_db)):
    perk = AdminService.update_perk(db, perk_id, perk_update)
    return success_response(
        message="Perk updated successfully",
        data=PerkResponse.model_validate(perk)
    )

# -------- Entitlement matrix --------

@router.get("/labels/{label_id}/perks")
async def list_label_perks(label_id: int, db: Session = Depends(get_db)):
    """Entitlement matrix row for one label"""
    LabelRepo.require(db, label_id)
    label_perks = EntitlementService.get_label_perks(db, label_id)
    return success_response(
        message="Label perks retrieved",
        data=[LabelPerkResponse.model_validate(lp) for lp in label_perks]
    )

@router.put("/labels/{label_id}/perks/{perk_id}")
async def update_label_perk(
    label_id: int,
    perk_id: int,
    data: LabelPerkUpdate,
    db: Session = Depends(get_db)
):
    """Enable/disable a perk for a label and set who pays for it"""
    label_perk = AdminService.upsert_label_perk(db, label_id, perk_id, data)
    return success_response(
        message="Label perk updated",
        data=LabelPerkResponse.model_validate(label_perk)
    )

# -------- Guests --------

@router.get("/events/{event_id}/guests")
async def search_guests(
    event_id: int,
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Search and list guests for an event"""
    EventRepo.require(db, event_id)

    query = db.query(Guest).filter(Guest.event_id == event_id)

    if search:
        query = query.filter(Guest.name.ilike(f"%{search}%"))
    if status:
        query = query.filter(Guest.status == status)

    # Pagination
    total = query.count()
    offset = (page - 1) * per_page
    guests = query.order_by(Guest.id).offset(offset).limit(per_page).all()

    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": [guest_payload(guest) for guest in guests],
            "pagination": {
                "page": page,
                "per_page": per_page,
                "total": total,
                "pages": (total + per_page - 1) // per_page
            }
        }
    )

@router.post("/events/{event_id}/guests")
async def create_guest(event_id: int, guest_data: GuestCreate, db: Session = Depends(get_db)):
    """Add a guest; the response carries the portal link to send"""
    guest = AdminService.create_guest(db, event_id, guest_data)
    return success_response(
        message="Guest created successfully",
        data=guest_payload(guest),
        status_code=201
    )

@router.get("/events/{event_id}/guests/{guest_id}")
async def get_guest(event_id: int, guest_id: int, db: Session = Depends(get_db)):
    guest = AdminService.get_guest(db, event_id, guest_id)
    return success_response(
        message="Guest retrieved",
        data=guest_payload(guest)
    )

@router.put("/events/{event_id}/guests/{guest_id}")
async def update_guest(
    event_id: int,
    guest_id: int,
    guest_update: GuestUpdate,
    db: Session = Depends(get_db)
):
    """Update guest information"""
    guest = AdminService.update_guest(db, event_id, guest_id, guest_update)
    return success_response(
        message="Guest updated successfully",
        data=guest_payload(guest)
    )

@router.delete("/events/{event_id}/guests/{guest_id}")
async def delete_guest(event_id: int, guest_id: int, db: Session = Depends(get_db)):
    """Permanently remove a guest and everything attached to them"""
    AdminService.delete_guest(db, event_id, guest_id)
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )

@router.get("/events/{event_id}/guests/{guest_id}/family")
async def list_family(event_id: int, guest_id: int, db: Session = Depends(get_db)):
    guest = AdminService.get_guest(db, event_id, guest_id)
    return success_response(
        message="Family members retrieved",
        data=[FamilyMemberResponse.model_validate(member) for member in guest.family]
    )

@router.post("/events/{event_id}/guests/{guest_id}/family")
async def add_family_member(
    event_id: int,
    guest_id: int,
    member: FamilyMemberCreate,
    db: Session = Depends(get_db)
):
    family_member = AdminService.add_family_member(db, event_id, guest_id, member)
    return success_response(
        message="Family member added",
        data=FamilyMemberResponse.model_validate(family_member),
        status_code=201
    )

# -------- Requests --------

@router.get("/events/{event_id}/requests")
async def list_requests(event_id: int, db: Session = Depends(get_db)):
    requests = AdminService.list_requests(db, event_id)
    return success_response(
        message="Requests retrieved",
        data=[
            {
                **GuestRequestResponse.model_validate(request).model_dump(),
                "guest_name": request.guest.name,
                "perk_name": request.perk.name if request.perk else None
            }
            for request in requests
        ]
    )

@router.put("/requests/{request_id}")
async def update_request(
    request_id: int,
    request_update: GuestRequestUpdate,
    db: Session = Depends(get_db)
):
    """Approve, reject or forward a guest request"""
    request = AdminService.update_request(db, request_id, request_update)
    return success_response(
        message="Request updated",
        data=GuestRequestResponse.model_validate(request)
    )

# -------- Itinerary --------

@router.get("/events/{event_id}/itinerary")
async def list_itinerary(event_id: int, db: Session = Depends(get_db)):
    EventRepo.require(db, event_id)
    items = ItineraryRepo.list_for_event(db, event_id)
    return success_response(
        message="Itinerary retrieved",
        data=[ItineraryEventResponse.model_validate(item) for item in items]
    )

@router.post("/events/{event_id}/itinerary")
async def create_itinerary_event(
    event_id: int,
    item_data: ItineraryEventCreate,
    db: Session = Depends(get_db)
):
    item = AdminService.create_itinerary_event(db, event_id, item_data)
    return success_response(
        message="Itinerary event created",
        data=ItineraryEventResponse.model_validate(item),
        status_code=201
    )

@router.put("/itinerary/{itinerary_event_id}")
async def update_itinerary_event(
    itinerary_event_id: int,
    item_update: ItineraryEventUpdate,
    db: Session = Depends(get_db)
):
    item = AdminService.update_itinerary_event(db, itinerary_event_id, item_update)
    return success_response(
        message="Itinerary event updated",
        data=ItineraryEventResponse.model_validate(item)
    )

# -------- Waitlist --------

@router.get("/events/{event_id}/waitlist")
async def list_waitlist(event_id: int, db: Session = Depends(get_db)):
    """Waitlisted guests in queue order"""
    EventRepo.require(db, event_id)
    return success_response(
        message="Waitlist retrieved",
        data=WaitlistService.list_waitlist(db, event_id)
    )

@router.delete("/events/{event_id}/waitlist/{guest_id}")
async def remove_from_waitlist(event_id: int, guest_id: int, db: Session = Depends(get_db)):
    guest = AdminService.get_guest(db, event_id, guest_id)
    WaitlistService.leave(db, guest)
    return success_response(
        message="Guest removed from waitlist",
        data={"guest_id": guest_id}
    )
