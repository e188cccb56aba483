"""
Itinerary registration service

The attendee counter on an itinerary event is only ever changed through
conditional UPDATE statements, so the capacity check and the increment are a
single atomic step in the database. Each counter change is committed together
with the matching guest_itinerary row change.
"""

import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError, CapacityExceededError
from app.models import Guest, GuestItinerary, ItineraryEvent
from app.schemas.itinerary import ItineraryEventResponse, GuestItineraryEntry, RegistrationResult
from app.services.repositories import ItineraryRepo

logger = logging.getLogger(__name__)

ATTENDING = "attending"

class ItineraryService:
    """Guest registration for scheduled activities of an event"""

    @staticmethod
    def get_for_guest(db: Session, guest: Guest, itinerary_event_id: int) -> ItineraryEvent:
        """Itinerary events of other events are invisible to the guest"""
        item = ItineraryRepo.get_by_id(db, itinerary_event_id)
        if not item or item.event_id != guest.event_id:
            raise NotFoundError("Event not found")
        return item

    @staticmethod
    def overlaps(first: ItineraryEvent, second: ItineraryEvent) -> bool:
        """Half-open interval overlap; an event without end_time is a point in time"""
        if first.start_time == second.start_time:
            return True
        first_end = first.end_time or first.start_time
        second_end = second.end_time or second.start_time
        return first.start_time < second_end and second.start_time < first_end

    @staticmethod
    def attending_events(db: Session, guest: Guest) -> List[ItineraryEvent]:
        return db.query(ItineraryEvent).join(
            GuestItinerary, GuestItinerary.itinerary_event_id == ItineraryEvent.id
        ).filter(
            GuestItinerary.guest_id == guest.id,
            GuestItinerary.status == ATTENDING
        ).order_by(ItineraryEvent.start_time).all()

    @staticmethod
    def find_conflicts(db: Session, guest: Guest, item: ItineraryEvent) -> List[ItineraryEvent]:
        """Other attending registrations of the guest whose time overlaps ``item``"""
        return [
            other for other in ItineraryService.attending_events(db, guest)
            if other.id != item.id and ItineraryService.overlaps(item, other)
        ]

    @staticmethod
    def list_for_guest(db: Session, guest: Guest) -> List[GuestItineraryEntry]:
        """The event's itinerary with the guest's registration state"""
        items = ItineraryRepo.list_for_event(db, guest.event_id)
        attending = ItineraryService.attending_events(db, guest)
        attending_ids = {item.id for item in attending}

        entries = []
        for item in items:
            has_conflict = any(
                other.id != item.id and ItineraryService.overlaps(item, other)
                for other in attending
            )
            entries.append(GuestItineraryEntry(
                **ItineraryEventResponse.model_validate(item).model_dump(),
                registered=item.id in attending_ids,
                has_conflict=has_conflict
            ))
        return entries

    @staticmethod
    def register(db: Session, guest: Guest, itinerary_event_id: int) -> RegistrationResult:
        """Register the guest, claiming one seat if the event has capacity.

        Overlapping registrations are reported back as conflicts; they do not
        block the registration.
        """
        item = ItineraryService.get_for_guest(db, guest, itinerary_event_id)

        existing = db.query(GuestItinerary).filter(
            GuestItinerary.guest_id == guest.id,
            GuestItinerary.itinerary_event_id == item.id
        ).first()
        if existing and existing.status == ATTENDING:
            raise ValidationError("Already registered for this event")

        conflicts = ItineraryService.find_conflicts(db, guest, item)

        claimed = db.query(ItineraryEvent).filter(
            ItineraryEvent.id == item.id,
            or_(
                ItineraryEvent.capacity.is_(None),
                ItineraryEvent.current_attendees < ItineraryEvent.capacity
            )
        ).update(
            {ItineraryEvent.current_attendees: ItineraryEvent.current_attendees + 1},
            synchronize_session=False
        )
        if not claimed:
            db.rollback()
            logger.warning(f"Itinerary event {itinerary_event_id} is full, rejected guest {guest.id}")
            raise CapacityExceededError("Event is full")

        if existing:
            existing.status = ATTENDING
        else:
            db.add(GuestItinerary(
                guest_id=guest.id,
                itinerary_event_id=item.id,
                status=ATTENDING
            ))

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Already registered for this event")

        db.refresh(item)
        if conflicts:
            logger.info(f"Guest {guest.id} registered for {item.id} with {len(conflicts)} time conflict(s)")
        else:
            logger.info(f"Guest {guest.id} registered for itinerary event {item.id}")

        return RegistrationResult(
            itinerary_event=ItineraryEventResponse.model_validate(item),
            conflicts=[ItineraryEventResponse.model_validate(c) for c in conflicts]
        )

    @staticmethod
    def unregister(db: Session, guest: Guest, itinerary_event_id: int) -> bool:
        """Drop the guest's registration; returns False when there was none"""
        registration = db.query(GuestItinerary).filter(
            GuestItinerary.guest_id == guest.id,
            GuestItinerary.itinerary_event_id == itinerary_event_id
        ).first()
        if not registration:
            return False

        was_attending = registration.status == ATTENDING
        db.delete(registration)
        if was_attending:
            ItineraryService.release_seat(db, itinerary_event_id)
        db.commit()

        logger.info(f"Guest {guest.id} unregistered from itinerary event {itinerary_event_id}")
        return True

    @staticmethod
    def release_seat(db: Session, itinerary_event_id: int) -> None:
        """Decrement the attendee counter, never below zero. Does not commit."""
        db.query(ItineraryEvent).filter(
            ItineraryEvent.id == itinerary_event_id,
            ItineraryEvent.current_attendees > 0
        ).update(
            {ItineraryEvent.current_attendees: ItineraryEvent.current_attendees - 1},
            synchronize_session=False
        )

    @staticmethod
    def release_guest_seats(db: Session, guest: Guest) -> None:
        """Release every seat the guest holds before the guest is deleted. Does not commit."""
        registrations = db.query(GuestItinerary).filter(
            GuestItinerary.guest_id == guest.id,
            GuestItinerary.status == ATTENDING
        ).all()
        for registration in registrations:
            ItineraryService.release_seat(db, registration.itinerary_event_id)
