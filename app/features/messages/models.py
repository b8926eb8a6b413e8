# Messages Feature - Models

from typing import Optional, Literal
from datetime import datetime
from beanie import Document, Indexed
from app.shared.models import TimestampMixin


class Message(Document, TimestampMixin):
    """
    Message document model.
    A message sent by a staff member to a patient, optionally from a template.
    """
    
    organization_id: Indexed(str)
    patient_id: Indexed(str)
    
    # Sender information
    sender_id: str
    sender_name: str
    sender_role: str
    
    # Message content
    content: str
    message_type: Literal["general", "appointment", "lab_result", "treatment_plan"] = "general"
    priority: Literal["low", "normal", "high"] = "normal"
    template_id: Optional[str] = None
    
    # Read status
    is_read: bool = False
    read_at: Optional[datetime] = None
    
    class Settings:
        name = "messages"
        use_state_management = True
        indexes = [
            # Index for a patient's message history (newest first)
            [("organization_id", 1), ("patient_id", 1), ("created_at", -1)],
        ]
    
    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": "org_123",
                "patient_id": "P00001",
                "sender_id": "user_456",
                "sender_name": "Dr. Sarah Anderson",
                "sender_role": "doctor",
                "content": "Your lab results look good!",
                "message_type": "lab_result",
                "priority": "normal",
            }
        }
