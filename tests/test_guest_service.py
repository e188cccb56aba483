"""
Tests for guest self-service operations
"""

import pytest
from datetime import datetime

from app.core.exceptions import ValidationError
from app.models import Event, Perk
from app.schemas.guest import GuestRequestCreate
from app.services.guest_service import GuestService

@pytest.fixture
def hosted_guest(wedding, make_guest):
    """Guest whose stay is covered from the 14th to the 16th"""
    return make_guest(
        wedding["event"],
        "Alice Smith",
        label=wedding["vip"],
        host_covered_check_in=datetime(2024, 8, 14),
        host_covered_check_out=datetime(2024, 8, 16)
    )

def test_bleisure_outside_window(db_session, hosted_guest):
    guest = GuestService.update_bleisure(
        db_session, hosted_guest, datetime(2024, 8, 10), datetime(2024, 8, 20)
    )
    
    assert guest.extended_check_in == datetime(2024, 8, 10)
    assert guest.extended_check_out == datetime(2024, 8, 20)

@pytest.mark.parametrize("check_in,check_out", [
    (datetime(2024, 8, 14), None),
    (datetime(2024, 8, 15), None),
    (None, datetime(2024, 8, 16)),
    (None, datetime(2024, 8, 15)),
])
def test_bleisure_inside_window_rejected(db_session, hosted_guest, check_in, check_out):
    with pytest.raises(ValidationError):
        GuestService.update_bleisure(db_session, hosted_guest, check_in, check_out)
    
    db_session.refresh(hosted_guest)
    assert hosted_guest.extended_check_in is None
    assert hosted_guest.extended_check_out is None

def test_bleisure_clears_dates(db_session, hosted_guest):
    GuestService.update_bleisure(db_session, hosted_guest, datetime(2024, 8, 10), None)
    
    guest = GuestService.update_bleisure(db_session, hosted_guest, None, None)
    
    assert guest.extended_check_in is None

def test_id_upload_case_insensitive_match(db_session, hosted_guest):
    result = GuestService.upload_id(db_session, hosted_guest, "https://files/id.png", "  alice SMITH ")
    
    assert result["success"] is True
    assert hosted_guest.id_verification_status == "verified"
    assert hosted_guest.id_document_url == "https://files/id.png"

def test_id_upload_mismatch_is_reported(db_session, hosted_guest):
    result = GuestService.upload_id(db_session, hosted_guest, "https://files/id.png", "Alicia Smyth")
    
    assert result["success"] is False
    assert result["message"] == "Name mismatch - verification failed"
    assert hosted_guest.id_verification_status == "failed"
    assert hosted_guest.id_verified_name == "Alicia Smyth"

def test_self_management_only_changes_given_flags(db_session, hosted_guest):
    GuestService.update_self_management(db_session, hosted_guest, True, None)
    guest = GuestService.update_self_management(db_session, hosted_guest, None, True)
    
    assert guest.self_manage_flights is True
    assert guest.self_manage_hotel is True

def test_submit_request_defaults(db_session, hosted_guest):
    request = GuestService.submit_request(db_session, hosted_guest, GuestRequestCreate(notes="Sea view please"))
    
    assert request.type == "room_upgrade"
    assert request.status == "pending"
    assert request.guest_id == hosted_guest.id

def test_submit_request_with_foreign_perk_rejected(db_session, wedding, hosted_guest):
    other = Event(name="Other", date=datetime(2024, 9, 1), location="Rome", event_code="ROME24")
    db_session.add(other)
    db_session.flush()
    foreign_perk = Perk(event_id=other.id, name="Vespa Tour", type="activity")
    db_session.add(foreign_perk)
    db_session.commit()
    
    with pytest.raises(ValidationError):
        GuestService.submit_request(
            db_session, hosted_guest, GuestRequestCreate(type="perk_request", perk_id=foreign_perk.id)
        )

def test_portal_is_complete(db_session, wedding, hosted_guest):
    portal = GuestService.build_portal(db_session, hosted_guest)
    
    assert portal.name == "Alice Smith"
    assert portal.event.event_code == "AMALFI24"
    assert portal.label.name == "VIP"
    assert [perk.name for perk in portal.available_perks] == ["Spa"]
    assert [entry.title for entry in portal.itinerary] == ["Morning Spa Session"]
    assert portal.waitlist_position is None
    assert portal.portal_url.endswith("/guest/token-alice-smith")
