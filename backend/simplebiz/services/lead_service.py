"""
Lead capture from public website lead forms.
"""
import logging
from collections.abc import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.content.document import LEAD_FORM_FIELDS, materialize
from simplebiz.models.lead import Lead, LeadStatus
from simplebiz.models.website import Website
from simplebiz.schemas.lead import LeadSubmission

logger = logging.getLogger(__name__)


class LeadFormDisabled(Exception):
    """The website does not accept lead form submissions."""


class LeadService:
    """Service for lead operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    @staticmethod
    def enabled_fields(website: Website) -> set[str]:
        """Lead form fields the website currently asks for."""
        lead_form = materialize(website.content)["leadForm"]
        if not isinstance(lead_form, Mapping) or not lead_form.get("enabled"):
            return set()
        fields = lead_form.get("fields")
        if not isinstance(fields, Mapping):
            return set()
        return {name for name in LEAD_FORM_FIELDS if fields.get(name)}
    
    async def submit(self, website: Website, data: LeadSubmission) -> Lead:
        """Store a lead from the website's form, keeping only enabled fields."""
        fields = self.enabled_fields(website)
        if not fields:
            raise LeadFormDisabled(f"Lead form is disabled for /{website.path}")
        
        submitted = data.model_dump()
        values = {name: submitted[name] if name in fields else None for name in LEAD_FORM_FIELDS}
        
        lead = Lead(
            profile_id=website.profile_id,
            name=values["name"],
            email=values["email"],
            phone=values["phone"],
            notes=values["message"],
            source="website",
            status=LeadStatus.OPEN,
        )
        self.db.add(lead)
        await self.db.flush()
        await self.db.refresh(lead)
        logger.info(f"Captured lead {lead.id} from /{website.path}")
        return lead
