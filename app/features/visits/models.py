# Visits Feature - Models

from typing import Optional, List
from datetime import datetime
from beanie import Document, Indexed
from pydantic import Field
from app.shared.models import TimestampMixin
from app.features.visits.schemas import VisitNotes


class Visit(Document, TimestampMixin):
    """A submitted, finalized patient visit."""
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    
    visit_date: datetime = Field(default_factory=datetime.utcnow)
    visit_type: str
    chief_complaint: str
    diagnosis: str
    treatment: str
    
    # Structured vital signs
    blood_pressure: Optional[str] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    bmi: Optional[float] = None
    vital_alerts: List[str] = Field(default_factory=list)
    
    # Comma-joined medication list
    medications: str = ""
    follow_up_date: Optional[str] = None
    
    notes: VisitNotes = Field(default_factory=VisitNotes)
    recorded_by: Optional[str] = None
    
    class Settings:
        name = "visits"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1), ("visit_date", -1)],
        ]
