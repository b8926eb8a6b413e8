# Appointments Feature - Models

from typing import Optional, Literal
from datetime import date
from beanie import Document, Indexed
from app.shared.models import TimestampMixin


AppointmentStatus = Literal["scheduled", "pending", "confirmed", "completed", "cancelled"]


class Appointment(Document, TimestampMixin):
    """Scheduled appointment between a patient and a provider."""
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    
    appointment_date: date
    appointment_time: Optional[str] = None  # "09:30"
    doctor_name: Optional[str] = None
    type: str = "consultation"
    status: AppointmentStatus = "scheduled"
    notes: Optional[str] = None
    
    class Settings:
        name = "appointments"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1), ("appointment_date", 1)],
        ]
