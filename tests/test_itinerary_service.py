"""
Tests for itinerary registration and capacity
"""

import pytest
from datetime import datetime

from app.core.exceptions import CapacityExceededError, NotFoundError, ValidationError
from app.models import Event, Guest, GuestItinerary, ItineraryEvent
from app.schemas.itinerary import ItineraryEventUpdate
from app.services.admin_service import AdminService
from app.services.itinerary_service import ItineraryService

def attending_count(db_session, item_id):
    return db_session.query(GuestItinerary).filter(
        GuestItinerary.itinerary_event_id == item_id,
        GuestItinerary.status == "attending"
    ).count()

@pytest.fixture
def dinner(db_session, wedding):
    """Unlimited event overlapping nothing"""
    item = ItineraryEvent(
        event_id=wedding["event"].id,
        title="Welcome Dinner",
        start_time=datetime(2024, 8, 14, 19, 0),
        end_time=datetime(2024, 8, 14, 22, 0)
    )
    db_session.add(item)
    db_session.commit()
    return item

def test_capacity_one_second_guest_rejected(db_session, wedding, make_guest):
    spa_id = wedding["spa_session"].id
    guest_a = make_guest(wedding["event"], "Guest A")
    guest_b = make_guest(wedding["event"], "Guest B")
    
    result = ItineraryService.register(db_session, guest_a, spa_id)
    assert result.itinerary_event.current_attendees == 1
    
    with pytest.raises(CapacityExceededError):
        ItineraryService.register(db_session, guest_b, spa_id)
    
    spa_session = db_session.get(ItineraryEvent, spa_id)
    assert spa_session.current_attendees == 1
    assert attending_count(db_session, spa_id) == 1

def test_stale_session_cannot_overshoot_capacity(db_session, wedding, make_guest, session_factory):
    """Two workers both saw 0/1 attendees; only the first one gets the seat"""
    spa_id = wedding["spa_session"].id
    guest_a = make_guest(wedding["event"], "Guest A")
    guest_b = make_guest(wedding["event"], "Guest B")
    
    first = session_factory()
    second = session_factory()
    seen_by_first = first.get(ItineraryEvent, spa_id)
    seen_by_second = second.get(ItineraryEvent, spa_id)
    assert seen_by_first.current_attendees == seen_by_second.current_attendees == 0
    
    ItineraryService.register(first, first.get(Guest, guest_a.id), spa_id)
    
    with pytest.raises(CapacityExceededError):
        ItineraryService.register(second, second.get(Guest, guest_b.id), spa_id)
    
    db_session.expire_all()
    assert db_session.get(ItineraryEvent, spa_id).current_attendees == 1
    assert attending_count(db_session, spa_id) == 1

def test_stale_agent_cannot_shrink_capacity_below_attendees(db_session, wedding, make_guest, session_factory):
    """Agent saw 1/5 attendees, a second registration lands before the capacity edit"""
    spa = wedding["spa_session"]
    spa.capacity = 5
    db_session.commit()
    ItineraryService.register(db_session, make_guest(wedding["event"], "Guest A"), spa.id)
    guest_b = make_guest(wedding["event"], "Guest B")
    
    agent = session_factory()
    assert agent.get(ItineraryEvent, spa.id).current_attendees == 1
    
    other = session_factory()
    ItineraryService.register(other, other.get(Guest, guest_b.id), spa.id)
    
    with pytest.raises(ValidationError):
        AdminService.update_itinerary_event(agent, spa.id, ItineraryEventUpdate(capacity=1))
    
    db_session.expire_all()
    spa = db_session.get(ItineraryEvent, spa.id)
    assert spa.capacity == 5
    assert spa.current_attendees == 2

def test_unlimited_event_counts_every_guest(db_session, wedding, make_guest, dinner):
    for index in range(5):
        guest = make_guest(wedding["event"], f"Guest {index}")
        ItineraryService.register(db_session, guest, dinner.id)
    
    db_session.refresh(dinner)
    assert dinner.current_attendees == 5
    assert attending_count(db_session, dinner.id) == 5

def test_register_twice_rejected(db_session, wedding, make_guest, dinner):
    guest = make_guest(wedding["event"], "Guest A")
    ItineraryService.register(db_session, guest, dinner.id)
    
    with pytest.raises(ValidationError):
        ItineraryService.register(db_session, guest, dinner.id)
    
    db_session.refresh(dinner)
    assert dinner.current_attendees == 1

def test_missing_itinerary_event(db_session, wedding, make_guest):
    guest = make_guest(wedding["event"], "Guest A")
    
    with pytest.raises(NotFoundError):
        ItineraryService.register(db_session, guest, 9999)

def test_itinerary_event_of_other_event_is_not_found(db_session, wedding, make_guest):
    other_event = Event(name="Other", date=datetime(2024, 9, 1), location="Rome", event_code="ROME24")
    db_session.add(other_event)
    db_session.flush()
    foreign = ItineraryEvent(event_id=other_event.id, title="Tour", start_time=datetime(2024, 9, 1, 10))
    db_session.add(foreign)
    db_session.commit()
    guest = make_guest(wedding["event"], "Guest A")
    
    with pytest.raises(NotFoundError):
        ItineraryService.register(db_session, guest, foreign.id)
    
    db_session.refresh(foreign)
    assert foreign.current_attendees == 0

def test_unregister_releases_seat(db_session, wedding, make_guest):
    spa_id = wedding["spa_session"].id
    guest = make_guest(wedding["event"], "Guest A")
    ItineraryService.register(db_session, guest, spa_id)
    
    assert ItineraryService.unregister(db_session, guest, spa_id) is True
    
    assert db_session.get(ItineraryEvent, spa_id).current_attendees == 0
    assert attending_count(db_session, spa_id) == 0

def test_unregister_when_not_registered_is_noop(db_session, wedding, make_guest, dinner):
    guest_a = make_guest(wedding["event"], "Guest A")
    guest_b = make_guest(wedding["event"], "Guest B")
    ItineraryService.register(db_session, guest_a, dinner.id)
    
    assert ItineraryService.unregister(db_session, guest_b, dinner.id) is False
    assert ItineraryService.unregister(db_session, guest_b, 9999) is False
    
    db_session.refresh(dinner)
    assert dinner.current_attendees == 1
    assert attending_count(db_session, dinner.id) == 1

def test_counter_never_negative(db_session, wedding, make_guest, dinner):
    guest = make_guest(wedding["event"], "Guest A")
    db_session.add(GuestItinerary(guest_id=guest.id, itinerary_event_id=dinner.id, status="attending"))
    db_session.commit()
    
    ItineraryService.unregister(db_session, guest, dinner.id)
    
    db_session.refresh(dinner)
    assert dinner.current_attendees == 0

def test_overlapping_registration_reports_conflict(db_session, wedding, make_guest):
    massage = ItineraryEvent(
        event_id=wedding["event"].id,
        title="Massage",
        start_time=datetime(2024, 8, 15, 10, 0),
        end_time=datetime(2024, 8, 15, 12, 0)
    )
    db_session.add(massage)
    db_session.commit()
    guest = make_guest(wedding["event"], "Guest A")
    ItineraryService.register(db_session, guest, wedding["spa_session"].id)
    
    result = ItineraryService.register(db_session, guest, massage.id)
    
    assert [conflict.title for conflict in result.conflicts] == ["Morning Spa Session"]
    entries = {entry.title: entry for entry in ItineraryService.list_for_guest(db_session, guest)}
    assert entries["Massage"].registered is True
    assert entries["Massage"].has_conflict is True
    assert entries["Morning Spa Session"].has_conflict is True

def test_back_to_back_events_do_not_conflict(db_session, wedding, make_guest):
    lunch = ItineraryEvent(
        event_id=wedding["event"].id,
        title="Lunch",
        start_time=datetime(2024, 8, 15, 11, 0),
        end_time=datetime(2024, 8, 15, 12, 0)
    )
    db_session.add(lunch)
    db_session.commit()
    guest = make_guest(wedding["event"], "Guest A")
    ItineraryService.register(db_session, guest, wedding["spa_session"].id)
    
    result = ItineraryService.register(db_session, guest, lunch.id)
    
    assert result.conflicts == []

def test_list_for_guest_marks_registrations(db_session, wedding, make_guest, dinner):
    guest = make_guest(wedding["event"], "Guest A")
    ItineraryService.register(db_session, guest, dinner.id)
    
    entries = ItineraryService.list_for_guest(db_session, guest)
    
    # Ordered by start time: dinner on the 14th, spa on the 15th
    assert [entry.title for entry in entries] == ["Welcome Dinner", "Morning Spa Session"]
    assert [entry.registered for entry in entries] == [True, False]
    assert not any(entry.has_conflict for entry in entries)
