# Lab Results Feature - Models

from typing import Optional, Literal
from datetime import datetime
from beanie import Document, Indexed
from app.shared.models import TimestampMixin


LabResultStatus = Literal["pending", "normal", "abnormal", "critical"]


class LabResult(Document, TimestampMixin):
    """Result of a laboratory test for a patient."""
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    
    test_name: str
    test_date: datetime
    result: Optional[str] = None
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    status: LabResultStatus = "pending"
    notes: Optional[str] = None
    
    class Settings:
        name = "lab_results"
        use_state_management = True
        indexes = [
            [("organization_id", 1), ("patient_id", 1), ("test_date", -1)],
        ]
