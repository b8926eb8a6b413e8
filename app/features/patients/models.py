# Patient Management Feature - Models

from typing import Optional, List
from datetime import date
from beanie import Document, Indexed
from pydantic import Field
from app.shared.models import TimestampMixin


class Patient(Document, TimestampMixin):
    """Patient demographic record, scoped to one organization."""
    
    # Unique patient identifier within the organization (e.g., P00001)
    patient_id: Indexed(str)
    organization_id: Indexed(str)
    
    # Personal information
    title: Optional[str] = None
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str  # Male, Female, Other
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    
    # Health information
    allergies: List[str] = Field(default_factory=list)
    medical_history: Optional[str] = None
    
    is_active: bool = True
    
    class Settings:
        name = "patients"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1)],
            [("organization_id", 1), ("last_name", 1), ("first_name", 1)],
        ]
    
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
