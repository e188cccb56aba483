"""
Entitlement resolution: which perks a guest may see, and who pays for them
"""

from typing import List

from sqlalchemy.orm import Session, joinedload

from app.models import Guest, LabelPerk, Perk
from app.schemas.label import AvailablePerk

class EntitlementService:
    """Resolves the label -> perk permission matrix for guests"""
    
    @staticmethod
    def get_available_perks(db: Session, guest: Guest) -> List[AvailablePerk]:
        """Enabled perks of the guest's label, ordered by perk id.
        
        Guests without a label see no perks. Entitlement is per label-perk
        pair, so a perk shared with other labels only shows up through the
        guest's own label row.
        """
        if guest.label_id is None:
            return []
        
        rows = db.query(LabelPerk, Perk).join(
            Perk, LabelPerk.perk_id == Perk.id
        ).filter(
            LabelPerk.label_id == guest.label_id,
            LabelPerk.is_enabled == True
        ).order_by(Perk.id).all()
        
        return [
            AvailablePerk(
                id=perk.id,
                event_id=perk.event_id,
                name=perk.name,
                description=perk.description,
                type=perk.type,
                is_enabled=label_perk.is_enabled,
                expense_handled_by_client=label_perk.expense_handled_by_client
            )
            for label_perk, perk in rows
        ]
    
    @staticmethod
    def get_label_perks(db: Session, label_id: int) -> List[LabelPerk]:
        """Full matrix row for a label, enabled and disabled, with perks attached"""
        return db.query(LabelPerk).options(
            joinedload(LabelPerk.perk)
        ).filter(LabelPerk.label_id == label_id).order_by(LabelPerk.perk_id).all()
