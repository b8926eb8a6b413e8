# Prescriptions Feature - Models

from typing import Optional, Literal
from datetime import date
from beanie import Document, Indexed
from app.shared.models import TimestampMixin


PrescriptionStatus = Literal["active", "completed", "discontinued"]


class Prescription(Document, TimestampMixin):
    """Medication prescribed to a patient."""
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    visit_id: Optional[str] = None
    
    medication_name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    prescribed_by: Optional[str] = None
    start_date: Optional[date] = None
    status: PrescriptionStatus = "active"
    
    class Settings:
        name = "prescriptions"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1), ("created_at", -1)],
        ]
