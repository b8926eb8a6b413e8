# Organization Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class OrganizationResponse(BaseModel):
    """Response schema for organization data."""
    id: str
    name: str
    owner_id: Optional[str] = None
    address: Optional[str] = ""
    logo_url: Optional[str] = ""
    primary_color: str = "#0ea5e9"
    phone: Optional[str] = ""
    email: Optional[str] = ""
    created_at: datetime
    updated_at: datetime


class UpdateOrganizationRequest(BaseModel):
    """Request schema for updating organization settings."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=500)
    logo_url: Optional[str] = None
    primary_color: Optional[str] = Field(None, pattern=r'^#[0-9A-Fa-f]{6}$')
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
