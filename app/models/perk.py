"""
Perk model
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Perk(Base):
    __tablename__ = "perks"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False)  # transport, accommodation, meal, activity
    
    # Relationships
    event = relationship("Event", back_populates="perks")
    label_perks = relationship("LabelPerk", back_populates="perk", cascade="all, delete-orphan")
