"""
Label and LabelPerk models

A label is a guest tier (VIP, Friend, Staff...). The label_perks table is the
entitlement matrix: a missing row means the perk is not visible to the label.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class Label(Base):
    __tablename__ = "labels"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    
    # Relationships
    event = relationship("Event", back_populates="labels")
    label_perks = relationship("LabelPerk", back_populates="label", cascade="all, delete-orphan")
    guests = relationship("Guest", back_populates="label")

class LabelPerk(Base):
    __tablename__ = "label_perks"
    
    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id"), nullable=False, index=True)
    perk_id = Column(Integer, ForeignKey("perks.id"), nullable=False)
    is_enabled = Column(Boolean, default=True, nullable=False)
    expense_handled_by_client = Column(Boolean, default=False, nullable=False)  # True: "Included", False: "Contact agent"
    
    # Relationships
    label = relationship("Label", back_populates="label_perks")
    perk = relationship("Perk", back_populates="label_perks")
    
    __table_args__ = (
        UniqueConstraint("label_id", "perk_id", name="uq_label_perk"),
    )
