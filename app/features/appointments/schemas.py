# Appointments Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field
from app.features.appointments.models import AppointmentStatus


class AppointmentCreate(BaseModel):
    """Schema for scheduling an appointment."""
    appointment_date: date
    appointment_time: Optional[str] = Field(None, pattern=r'^\d{2}:\d{2}$')
    doctor_name: Optional[str] = Field(None, max_length=100)
    type: str = Field("consultation", max_length=50)
    notes: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    """Schema for changing an appointment's status."""
    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    """Schema for appointment response."""
    id: str
    organization_id: str
    patient_id: str
    appointment_date: date
    appointment_time: Optional[str] = None
    doctor_name: Optional[str] = None
    type: str
    status: AppointmentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentResponse]
    total: int
