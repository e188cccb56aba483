"""
Tests for token and booking reference resolution
"""

import pytest

from app.core.exceptions import NotFoundError
from app.services.access_service import AccessService
from app.services.repositories import GuestRepo

def test_resolve_by_token(db_session, wedding, make_guest):
    guest = make_guest(wedding["event"], "Alice Smith", label=wedding["vip"])
    
    resolved = AccessService.get_guest_by_token(db_session, "token-alice-smith")
    
    assert resolved.id == guest.id

@pytest.mark.parametrize("token", ["", "token-nobody", "../../etc/passwd", "x" * 500])
def test_unknown_or_malformed_token_is_not_found(db_session, wedding, make_guest, token):
    make_guest(wedding["event"], "Alice Smith")
    
    with pytest.raises(NotFoundError) as exc_info:
        AccessService.get_guest_by_token(db_session, token)
    
    assert exc_info.value.message == "Invalid access token"

def test_resolve_by_booking_ref_loads_event_and_label(db_session, wedding, make_guest):
    make_guest(wedding["event"], "Alice Smith", label=wedding["vip"])
    
    guest = AccessService.get_guest_by_booking_ref(db_session, " REF-ALICE-SMITH ")
    
    assert guest.event.name == "Smith & Jones Wedding"
    assert guest.label.name == "VIP"

def test_booking_ref_not_found(db_session, wedding):
    with pytest.raises(NotFoundError):
        AccessService.get_guest_by_booking_ref(db_session, "REF-NOPE")

def test_generated_credentials_are_unique(db_session, wedding):
    tokens = {GuestRepo.generate_access_token(db_session) for _ in range(20)}
    refs = {GuestRepo.generate_booking_ref(db_session) for _ in range(20)}
    
    assert len(tokens) == 20
    assert all(len(token) >= 40 for token in tokens)
    assert all(ref.startswith("BK-") for ref in refs)

def test_portal_url_contains_token(db_session, wedding, make_guest):
    guest = make_guest(wedding["event"], "Alice Smith")
    
    assert AccessService.portal_url(guest).endswith("/guest/token-alice-smith")
