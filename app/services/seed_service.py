"""
Demo data bootstrap, run explicitly from ``seed.py``
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models import Event, Label, Perk, LabelPerk, Guest, ItineraryEvent
from app.services.repositories import EventRepo, GuestRepo

logger = logging.getLogger(__name__)

class SeedService:
    """Populates an empty database with one demo wedding"""

    @staticmethod
    def seed_demo_data(db: Session) -> Optional[Event]:
        """Create the demo event; returns None when events already exist"""
        if db.query(Event.id).first():
            logger.info("Database already has events, skipping seed")
            return None

        event = Event(
            name="Smith & Jones Wedding",
            date=datetime(2024, 8, 15),
            location="Grand Hotel, Amalfi Coast",
            description="A beautiful celebration of love.",
            event_code=EventRepo.generate_event_code(db),
            is_published=True
        )
        db.add(event)
        db.flush()

        vip = Label(event_id=event.id, name="VIP", description="Close family and friends")
        friend = Label(event_id=event.id, name="Friend", description="Friends of the couple")
        transport = Perk(event_id=event.id, name="Airport Pickup", description="Private car from NAP airport", type="transport")
        spa = Perk(event_id=event.id, name="Spa Access", description="Full access to hotel spa", type="activity")
        db.add_all([vip, friend, transport, spa])
        db.flush()

        # VIP gets both on the client; friends pay for the spa themselves
        db.add_all([
            LabelPerk(label_id=vip.id, perk_id=transport.id, is_enabled=True, expense_handled_by_client=True),
            LabelPerk(label_id=vip.id, perk_id=spa.id, is_enabled=True, expense_handled_by_client=True),
            LabelPerk(label_id=friend.id, perk_id=transport.id, is_enabled=True, expense_handled_by_client=True),
            LabelPerk(label_id=friend.id, perk_id=spa.id, is_enabled=True, expense_handled_by_client=False),
        ])

        db.add_all([
            ItineraryEvent(
                event_id=event.id,
                title="Welcome Dinner",
                location="Terrace Restaurant",
                start_time=datetime(2024, 8, 14, 19, 0),
                end_time=datetime(2024, 8, 14, 22, 0),
                is_mandatory=False,
                capacity=80
            ),
            ItineraryEvent(
                event_id=event.id,
                title="Ceremony",
                location="Villa Cimbrone Gardens",
                start_time=datetime(2024, 8, 15, 16, 0),
                end_time=datetime(2024, 8, 15, 17, 0),
                is_mandatory=True
            ),
            ItineraryEvent(
                event_id=event.id,
                perk_id=spa.id,
                title="Morning Spa Session",
                location="Hotel Spa",
                start_time=datetime(2024, 8, 15, 9, 0),
                end_time=datetime(2024, 8, 15, 11, 0),
                capacity=10
            ),
        ])

        db.add(Guest(
            event_id=event.id,
            label_id=vip.id,
            name="Alice Smith",
            email="alice@example.com",
            booking_ref="SMITH24",
            access_token=GuestRepo.generate_access_token(db),
            status="confirmed",
            allocated_seats=2,
            confirmed_seats=1,
            arrival_date=datetime(2024, 8, 14),
            departure_date=datetime(2024, 8, 16),
            travel_mode="Flight",
            host_covered_check_in=datetime(2024, 8, 14),
            host_covered_check_out=datetime(2024, 8, 16)
        ))

        db.commit()
        db.refresh(event)
        logger.info(f"Seeded demo event {event.id} ({event.event_code})")
        return event
