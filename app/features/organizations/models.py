# Organization Feature - Models

from typing import Optional
from beanie import Document
from app.shared.models import TimestampMixin


class Organization(Document, TimestampMixin):
    """Organization (tenant) that owns staff, patients and clinical records."""
    
    name: str
    owner_id: Optional[str] = None  # User ID who created this organization
    address: Optional[str] = ""
    logo_url: Optional[str] = ""
    primary_color: str = "#0ea5e9"
    
    # Contact information
    phone: Optional[str] = ""
    email: Optional[str] = ""
    
    class Settings:
        name = "organizations"
        use_state_management = True
