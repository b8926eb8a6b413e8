# Lab Results Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field
from app.features.lab_results.models import LabResultStatus


class LabResultCreate(BaseModel):
    """Schema for recording a lab result."""
    test_name: str = Field(..., min_length=1, max_length=200)
    test_date: datetime
    result: Optional[str] = None
    unit: Optional[str] = Field(None, max_length=50)
    reference_range: Optional[str] = Field(None, max_length=100)
    status: LabResultStatus = "pending"
    notes: Optional[str] = None


class LabResultResponse(BaseModel):
    """Schema for lab result response."""
    id: str
    organization_id: str
    patient_id: str
    test_name: str
    test_date: datetime
    result: Optional[str] = None
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    status: LabResultStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LabResultListResponse(BaseModel):
    lab_results: List[LabResultResponse]
    total: int
