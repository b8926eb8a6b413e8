# Vaccinations Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field


class VaccinationCreate(BaseModel):
    """Schema for recording a vaccination."""
    vaccine_name: str = Field(..., min_length=1, max_length=200)
    date_administered: date
    administered_by: Optional[str] = Field(None, max_length=100)
    batch_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=100)
    next_due_date: Optional[date] = None
    notes: Optional[str] = None


class VaccinationUpdate(BaseModel):
    """Schema for correcting a vaccination record."""
    vaccine_name: Optional[str] = Field(None, min_length=1, max_length=200)
    date_administered: Optional[date] = None
    administered_by: Optional[str] = Field(None, max_length=100)
    batch_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=100)
    next_due_date: Optional[date] = None
    notes: Optional[str] = None


class VaccinationResponse(BaseModel):
    id: str
    organization_id: str
    patient_id: str
    vaccine_name: str
    date_administered: date
    administered_by: Optional[str] = None
    batch_number: Optional[str] = None
    manufacturer: Optional[str] = None
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VaccinationListResponse(BaseModel):
    vaccinations: List[VaccinationResponse]
    total: int


class VaccinationStatisticsResponse(BaseModel):
    """Organization-wide vaccination counters."""
    total_vaccinations: int
    patients_vaccinated: int
    overdue: int
    due_soon: int
