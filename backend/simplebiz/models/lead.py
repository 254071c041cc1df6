"""
Lead model for enquiries captured by the public website lead form.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, Enum, String, Text
from sqlalchemy.orm import relationship

from simplebiz.models.base import Base, ProfileBaseModel


class LeadStatus(str, PyEnum):
    OPEN = "open"
    CLOSED = "closed"
    LOST = "lost"


class Lead(Base, ProfileBaseModel):
    """A sales lead belonging to a business profile."""
    
    __tablename__ = "leads"
    
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    source = Column(String(50), nullable=True)
    status = Column(
        Enum(LeadStatus),
        default=LeadStatus.OPEN,
        nullable=False,
    )
    
    # Relationships
    profile = relationship("Profile", back_populates="leads")
    
    def __repr__(self) -> str:
        return f"<Lead {self.name} ({self.status.value})>"
