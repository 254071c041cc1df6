"""
SQLAlchemy models for SimpleBiz.
"""
from simplebiz.models.base import Base, BaseModel, ProfileBaseModel
from simplebiz.models.profile import Profile
from simplebiz.models.website import Website
from simplebiz.models.lead import Lead, LeadStatus

__all__ = [
    "Base",
    "BaseModel",
    "ProfileBaseModel",
    "Profile",
    "Website",
    "Lead",
    "LeadStatus",
]
