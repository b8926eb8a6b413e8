# Vaccinations Feature - Models

from typing import Optional
from datetime import date
from beanie import Document, Indexed
from app.shared.models import TimestampMixin


class Vaccination(Document, TimestampMixin):
    """A vaccine dose administered to a patient."""
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    
    vaccine_name: str
    date_administered: date
    administered_by: Optional[str] = None
    batch_number: Optional[str] = None
    manufacturer: Optional[str] = None
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    
    class Settings:
        name = "vaccinations"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1), ("date_administered", -1)],
            [("organization_id", 1), ("next_due_date", 1)],
        ]
