# Prescriptions Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field
from app.features.prescriptions.models import PrescriptionStatus


class PrescriptionCreate(BaseModel):
    """Schema for prescribing a medication."""
    medication_name: str = Field(..., min_length=1, max_length=200)
    dosage: Optional[str] = Field(None, max_length=100)
    frequency: Optional[str] = Field(None, max_length=100)
    duration: Optional[str] = Field(None, max_length=100)
    instructions: Optional[str] = None
    start_date: Optional[date] = None
    visit_id: Optional[str] = None


class PrescriptionStatusUpdate(BaseModel):
    status: PrescriptionStatus


class PrescriptionResponse(BaseModel):
    """Schema for prescription response."""
    id: str
    organization_id: str
    patient_id: str
    visit_id: Optional[str] = None
    medication_name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    prescribed_by: Optional[str] = None
    start_date: Optional[date] = None
    status: PrescriptionStatus
    created_at: datetime
    updated_at: datetime


class PrescriptionListResponse(BaseModel):
    prescriptions: List[PrescriptionResponse]
    total: int
