"""
Website model: one content document per business profile.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship

from simplebiz.content.document import default_content
from simplebiz.models.base import Base, BaseModel


class Website(Base, BaseModel):
    """A tenant website. ``content`` holds the whole WebsiteContent document."""
    
    __tablename__ = "websites"
    
    profile_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    path = Column(String(100), unique=True, nullable=False, index=True)
    content = Column(JSONB, nullable=False, default=default_content)
    published = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, default=1, nullable=False)
    
    # Relationships
    profile = relationship("Profile", back_populates="website")
    
    def __repr__(self) -> str:
        return f"<Website /{self.path} v{self.version}>"
