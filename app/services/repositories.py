"""
Repository layer: the lookups every service shares.

Getters return ``None`` when a row is missing; the ``require_*`` variants
raise ``NotFoundError`` so callers can short-circuit with a 404.
"""

from __future__ import annotations

import secrets
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models import Event, Guest, Label, Perk, LabelPerk, ItineraryEvent


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def get_by_code(db: Session, event_code: str) -> Optional[Event]:
        return db.query(Event).filter(Event.event_code == event_code).first()

    @staticmethod
    def require(db: Session, event_id: int) -> Event:
        event = EventRepo.get_by_id(db, event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    @staticmethod
    def generate_event_code(db: Session) -> str:
        event_code = secrets.token_urlsafe(8)
        while EventRepo.get_by_code(db, event_code):
            event_code = secrets.token_urlsafe(8)
        return event_code


# -------- Label / Perk repository --------

class LabelRepo:
    @staticmethod
    def get_by_id(db: Session, label_id: int) -> Optional[Label]:
        return db.query(Label).filter(Label.id == label_id).first()

    @staticmethod
    def require(db: Session, label_id: int) -> Label:
        label = db.query(Label).filter(Label.id == label_id).first()
        if not label:
            raise NotFoundError("Label not found")
        return label

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Label]:
        return db.query(Label).filter(Label.event_id == event_id).order_by(Label.id).all()


class PerkRepo:
    @staticmethod
    def get_by_id(db: Session, perk_id: int) -> Optional[Perk]:
        return db.query(Perk).filter(Perk.id == perk_id).first()

    @staticmethod
    def require(db: Session, perk_id: int) -> Perk:
        perk = PerkRepo.get_by_id(db, perk_id)
        if not perk:
            raise NotFoundError("Perk not found")
        return perk

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Perk]:
        return db.query(Perk).filter(Perk.event_id == event_id).order_by(Perk.id).all()

    @staticmethod
    def get_label_perk(db: Session, label_id: int, perk_id: int) -> Optional[LabelPerk]:
        return db.query(LabelPerk).filter(
            LabelPerk.label_id == label_id,
            LabelPerk.perk_id == perk_id
        ).first()


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def get_by_id(db: Session, guest_id: int) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id).first()

    @staticmethod
    def require(db: Session, guest_id: int) -> Guest:
        guest = GuestRepo.get_by_id(db, guest_id)
        if not guest:
            raise NotFoundError("Guest not found")
        return guest

    @staticmethod
    def get_by_access_token(db: Session, token: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.access_token == token).first()

    @staticmethod
    def get_by_booking_ref(db: Session, booking_ref: str) -> Optional[Guest]:
        return db.query(Guest).options(
            joinedload(Guest.event),
            joinedload(Guest.label)
        ).filter(Guest.booking_ref == booking_ref).first()

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Guest]:
        return db.query(Guest).filter(Guest.event_id == event_id).order_by(Guest.id).all()

    @staticmethod
    def generate_access_token(db: Session) -> str:
        token = secrets.token_urlsafe(32)
        while GuestRepo.get_by_access_token(db, token):
            token = secrets.token_urlsafe(32)
        return token

    @staticmethod
    def generate_booking_ref(db: Session) -> str:
        def make_ref() -> str:
            return f"{settings.BOOKING_REF_PREFIX}-{secrets.token_hex(3).upper()}"

        booking_ref = make_ref()
        while db.query(Guest.id).filter(Guest.booking_ref == booking_ref).first():
            booking_ref = make_ref()
        return booking_ref


# -------- Itinerary repository --------

class ItineraryRepo:
    @staticmethod
    def get_by_id(db: Session, itinerary_event_id: int) -> Optional[ItineraryEvent]:
        return db.query(ItineraryEvent).filter(ItineraryEvent.id == itinerary_event_id).first()

    @staticmethod
    def require(db: Session, itinerary_event_id: int) -> ItineraryEvent:
        item = ItineraryRepo.get_by_id(db, itinerary_event_id)
        if not item:
            raise NotFoundError("Itinerary event not found")
        return item

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[ItineraryEvent]:
        return db.query(ItineraryEvent).filter(
            ItineraryEvent.event_id == event_id
        ).order_by(ItineraryEvent.start_time, ItineraryEvent.id).all()
