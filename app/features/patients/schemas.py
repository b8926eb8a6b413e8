# Patient Management Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field


# ============== Create Patient ==============

class CreatePatientRequest(BaseModel):
    """Request schema for registering a new patient."""
    title: Optional[str] = Field(None, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    gender: str = Field(..., pattern=r'^(Male|Female|Other)$')
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=500)
    allergies: List[str] = Field(default_factory=list)
    medical_history: Optional[str] = None
    
    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Sarah",
                "last_name": "Johnson",
                "date_of_birth": "1990-05-15",
                "gender": "Female",
                "phone": "+2348012345678",
                "email": "sarah.johnson@email.com",
                "allergies": ["Penicillin"],
                "medical_history": "Hypertension since 2018",
            }
        }


# ============== Update Patient ==============

class UpdatePatientRequest(BaseModel):
    """Request schema for updating patient information."""
    title: Optional[str] = Field(None, max_length=20)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, pattern=r'^(Male|Female|Other)$')
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=500)
    allergies: Optional[List[str]] = None
    medical_history: Optional[str] = None
    is_active: Optional[bool] = None


# ============== Patient Response ==============

class PatientResponse(BaseModel):
    """Response schema for patient data."""
    id: str
    patient_id: str
    organization_id: str
    title: Optional[str] = None
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    allergies: List[str] = []
    medical_history: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PatientListResponse(BaseModel):
    """Response schema for list of patients."""
    patients: List[PatientResponse]
    total: int
