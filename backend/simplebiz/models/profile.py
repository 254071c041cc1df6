"""
Business profile model. A profile is the tenant: it signs in and owns one website.
"""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from simplebiz.models.base import Base, BaseModel


class Profile(Base, BaseModel):
    """Business profile with login credentials and contact details."""
    
    __tablename__ = "profiles"
    
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    business_name = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    abn = Column(String(50), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    
    # Relationships
    website = relationship("Website", back_populates="profile", uselist=False, cascade="all, delete-orphan")
    leads = relationship("Lead", back_populates="profile", cascade="all, delete-orphan")
    
    def __repr__(self) -> str:
        return f"<Profile {self.business_name} ({self.email})>"
