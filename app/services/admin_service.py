"""
Agent-side administration of events, tiers, perks, guests and itineraries
"""

import logging
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotFoundError, ValidationError
from app.models import (
    Event,
    Label,
    Perk,
    LabelPerk,
    Guest,
    GuestFamily,
    GuestRequest,
    ItineraryEvent,
)
from app.schemas.event import EventCreate, EventUpdate
from app.schemas.guest import GuestCreate, GuestUpdate, FamilyMemberCreate, GuestRequestUpdate
from app.schemas.itinerary import ItineraryEventCreate, ItineraryEventUpdate
from app.schemas.label import LabelCreate, LabelUpdate, PerkCreate, PerkUpdate, LabelPerkUpdate
from app.services.access_service import AccessService
from app.services.repositories import EventRepo, LabelRepo, PerkRepo, GuestRepo, ItineraryRepo
from app.services.rsvp_service import RSVPService
from app.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)

def apply_updates(instance, updates: Dict) -> None:
    for field, value in updates.items():
        setattr(instance, field, value)

class AdminService:
    """Create/read/update operations behind the agent dashboard"""

    # -------- Events --------

    @staticmethod
    def list_events(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.date).all()

    @staticmethod
    def create_event(db: Session, event_data: EventCreate) -> Event:
        event = Event(
            **event_data.model_dump(),
            event_code=EventRepo.generate_event_code(db)
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        logger.info(f"Created event {event.id} with code {event.event_code}")
        return event

    @staticmethod
    def update_event(db: Session, event_id: int, event_update: EventUpdate) -> Event:
        event = EventRepo.require(db, event_id)
        apply_updates(event, event_update.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def event_statistics(db: Session, event_id: int) -> Dict:
        event = EventRepo.require(db, event_id)

        def count(model, *criteria) -> int:
            return db.query(func.count(model.id)).filter(*criteria).scalar() or 0

        return {
            "event": event,
            "total_guests": count(Guest, Guest.event_id == event_id),
            "confirmed_guests": count(Guest, Guest.event_id == event_id, Guest.status == "confirmed"),
            "waitlisted_guests": count(Guest, Guest.event_id == event_id, Guest.is_on_waitlist == True),
            "total_labels": count(Label, Label.event_id == event_id),
            "total_perks": count(Perk, Perk.event_id == event_id),
        }

    # -------- Labels and perks --------

    @staticmethod
    def create_label(db: Session, event_id: int, label_data: LabelCreate) -> Label:
        EventRepo.require(db, event_id)
        label = Label(event_id=event_id, **label_data.model_dump())
        db.add(label)
        db.commit()
        db.refresh(label)
        return label

    @staticmethod
    def update_label(db: Session, label_id: int, label_update: LabelUpdate) -> Label:
        label = LabelRepo.require(db, label_id)
        apply_updates(label, label_update.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(label)
        return label

    @staticmethod
    def create_perk(db: Session, event_id: int, perk_data: PerkCreate) -> Perk:
        EventRepo.require(db, event_id)
        perk = Perk(event_id=event_id, **perk_data.model_dump())
        db.add(perk)
        db.commit()
        db.refresh(perk)
        return perk

    @staticmethod
    def update_perk(db: Session, perk_id: int, perk_update: PerkUpdate) -> Perk:
        perk = PerkRepo.require(db, perk_id)
        apply_updates(perk, perk_update.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(perk)
        return perk

    @staticmethod
    def upsert_label_perk(db: Session, label_id: int, perk_id: int, data: LabelPerkUpdate) -> LabelPerk:
        """Set one cell of the entitlement matrix, creating it if missing"""
        label = LabelRepo.require(db, label_id)
        perk = PerkRepo.require(db, perk_id)
        if label.event_id != perk.event_id:
            raise ValidationError("Label and perk belong to different events")

        label_perk = PerkRepo.get_label_perk(db, label_id, perk_id)
        if label_perk:
            apply_updates(label_perk, data.model_dump(exclude_unset=True, exclude_none=True))
        else:
            label_perk = LabelPerk(
                label_id=label_id,
                perk_id=perk_id,
                is_enabled=True if data.is_enabled is None else data.is_enabled,
                expense_handled_by_client=bool(data.expense_handled_by_client)
            )
            db.add(label_perk)
        db.commit()
        db.refresh(label_perk)
        return label_perk

    # -------- Guests --------

    @staticmethod
    def _check_label(db: Session, event_id: int, label_id) -> None:
        if label_id is None:
            return
        label = LabelRepo.require(db, label_id)
        if label.event_id != event_id:
            raise ValidationError("Label does not belong to this event")

    @staticmethod
    def create_guest(db: Session, event_id: int, guest_data: GuestCreate) -> Guest:
        """Create a guest with fresh portal credentials"""
        EventRepo.require(db, event_id)
        AdminService._check_label(db, event_id, guest_data.label_id)

        guest = Guest(
            event_id=event_id,
            **guest_data.model_dump(),
            access_token=GuestRepo.generate_access_token(db),
            booking_ref=GuestRepo.generate_booking_ref(db)
        )
        db.add(guest)
        db.commit()
        db.refresh(guest)

        # Invitation delivery happens outside this service
        logger.info(f"Created guest {guest.id} ({guest.booking_ref}), portal link {AccessService.portal_url(guest)}")
        return guest

    @staticmethod
    def get_guest(db: Session, event_id: int, guest_id: int) -> Guest:
        guest = GuestRepo.get_by_id(db, guest_id)
        if not guest or guest.event_id != event_id:
            raise NotFoundError("Guest not found")
        return guest

    @staticmethod
    def update_guest(db: Session, event_id: int, guest_id: int, guest_update: GuestUpdate) -> Guest:
        guest = AdminService.get_guest(db, event_id, guest_id)
        updates = guest_update.model_dump(exclude_unset=True)

        errors = []
        if "label_id" in updates:
            AdminService._check_label(db, event_id, updates["label_id"])
        allocated = updates.get("allocated_seats")
        if allocated is not None and allocated < guest.confirmed_seats:
            errors.append(f"Guest already confirmed {guest.confirmed_seats} seat(s)")
        if errors:
            raise ValidationError("Validation failed", details=errors)

        apply_updates(guest, updates)
        if "label_id" in updates and guest.is_on_waitlist:
            guest.waitlist_priority = WaitlistService.priority_for_label(LabelRepo.get_by_id(db, guest.label_id))
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def delete_guest(db: Session, event_id: int, guest_id: int) -> None:
        guest = AdminService.get_guest(db, event_id, guest_id)
        RSVPService.purge_guest(db, guest)
        logger.info(f"Deleted guest {guest_id} from event {event_id}")

    @staticmethod
    def add_family_member(db: Session, event_id: int, guest_id: int, member: FamilyMemberCreate) -> GuestFamily:
        guest = AdminService.get_guest(db, event_id, guest_id)
        family_member = GuestFamily(guest_id=guest.id, **member.model_dump())
        db.add(family_member)
        db.commit()
        db.refresh(family_member)
        return family_member

    # -------- Requests --------

    @staticmethod
    def list_requests(db: Session, event_id: int) -> List[GuestRequest]:
        EventRepo.require(db, event_id)
        return db.query(GuestRequest).join(
            Guest, GuestRequest.guest_id == Guest.id
        ).options(
            joinedload(GuestRequest.guest),
            joinedload(GuestRequest.perk)
        ).filter(Guest.event_id == event_id).order_by(GuestRequest.id).all()

    @staticmethod
    def update_request(db: Session, request_id: int, request_update: GuestRequestUpdate) -> GuestRequest:
        request = db.query(GuestRequest).filter(GuestRequest.id == request_id).first()
        if not request:
            raise NotFoundError("Request not found")
        request.status = request_update.status
        if request_update.notes is not None:
            request.notes = request_update.notes
        db.commit()
        db.refresh(request)
        logger.info(f"Request {request.id} set to {request.status}")
        return request

    # -------- Itinerary --------

    @staticmethod
    def _check_perk(db: Session, event_id: int, perk_id) -> None:
        if perk_id is None:
            return
        perk = PerkRepo.require(db, perk_id)
        if perk.event_id != event_id:
            raise ValidationError("Perk does not belong to this event")

    @staticmethod
    def create_itinerary_event(db: Session, event_id: int, item_data: ItineraryEventCreate) -> ItineraryEvent:
        EventRepo.require(db, event_id)
        AdminService._check_perk(db, event_id, item_data.perk_id)
        item = ItineraryEvent(event_id=event_id, current_attendees=0, **item_data.model_dump())
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update_itinerary_event(
        db: Session,
        itinerary_event_id: int,
        item_update: ItineraryEventUpdate
    ) -> ItineraryEvent:
        item = ItineraryRepo.require(db, itinerary_event_id)
        updates = item_update.model_dump(exclude_unset=True)

        if "perk_id" in updates:
            AdminService._check_perk(db, item.event_id, updates["perk_id"])
        start_time = updates.get("start_time", item.start_time)
        end_time = updates.get("end_time", item.end_time)
        if end_time is not None and end_time < start_time:
            raise ValidationError("end_time must not be before start_time")

        has_capacity = "capacity" in updates
        capacity = updates.pop("capacity", None)
        apply_updates(item, updates)

        # Attendee count is checked inside the UPDATE
        if has_capacity and capacity is not None:
            changed = db.query(ItineraryEvent).filter(
                ItineraryEvent.id == item.id,
                ItineraryEvent.current_attendees <= capacity
            ).update({ItineraryEvent.capacity: capacity}, synchronize_session=False)
            if not changed:
                db.rollback()
                raise ValidationError(
                    f"Capacity cannot be lower than the {item.current_attendees} guest(s) already attending"
                )
        elif has_capacity:
            item.capacity = None
        db.commit()
        db.refresh(item)
        return item
