"""
Tests for label -> perk entitlement resolution
"""

from app.models import Label, LabelPerk
from app.services.entitlement_service import EntitlementService

def test_vip_sees_spa_included(db_session, wedding, make_guest):
    """VIP label with one enabled, client-paid perk resolves to exactly that perk"""
    guest = make_guest(wedding["event"], "Alice Smith", label=wedding["vip"])
    
    perks = EntitlementService.get_available_perks(db_session, guest)
    
    assert len(perks) == 1
    assert perks[0].name == "Spa"
    assert perks[0].expense_handled_by_client is True
    assert perks[0].is_enabled is True

def test_disabled_row_hides_perk(db_session, wedding, make_guest):
    """Friend has the spa row disabled, so only the pickup shows"""
    guest = make_guest(wedding["event"], "Bob Friend", label=wedding["friend"])
    
    perks = EntitlementService.get_available_perks(db_session, guest)
    
    assert [perk.name for perk in perks] == ["Airport Pickup"]

def test_guest_without_label_sees_nothing(db_session, wedding, make_guest):
    guest = make_guest(wedding["event"], "No Label")
    
    assert EntitlementService.get_available_perks(db_session, guest) == []

def test_label_without_rows_sees_nothing(db_session, wedding, make_guest):
    """Family label has no matrix rows at all"""
    guest = make_guest(wedding["event"], "Carol Family", label=wedding["family"])
    
    assert EntitlementService.get_available_perks(db_session, guest) == []

def test_shared_perk_uses_own_label_row(db_session, wedding, make_guest):
    """Spa is enabled for VIP but that must not leak to another label"""
    staff = Label(event_id=wedding["event"].id, name="Staff")
    db_session.add(staff)
    db_session.commit()
    db_session.add(LabelPerk(
        label_id=staff.id,
        perk_id=wedding["spa"].id,
        is_enabled=True,
        expense_handled_by_client=False
    ))
    db_session.commit()
    
    vip_guest = make_guest(wedding["event"], "Vip Guest", label=wedding["vip"])
    staff_guest = make_guest(wedding["event"], "Staff Guest", label=staff)
    
    vip_perks = EntitlementService.get_available_perks(db_session, vip_guest)
    staff_perks = EntitlementService.get_available_perks(db_session, staff_guest)
    
    assert vip_perks[0].expense_handled_by_client is True
    assert staff_perks[0].name == "Spa"
    assert staff_perks[0].expense_handled_by_client is False

def test_label_perks_include_disabled_rows(db_session, wedding):
    """Agent view of a label shows the whole matrix row"""
    rows = EntitlementService.get_label_perks(db_session, wedding["friend"].id)
    
    assert len(rows) == 2
    enabled = {row.perk.name: row.is_enabled for row in rows}
    assert enabled == {"Airport Pickup": True, "Spa": False}
