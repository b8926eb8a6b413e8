# Messages Feature - Schemas

from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, Field


MessageType = Literal["general", "appointment", "lab_result", "treatment_plan"]
MessagePriority = Literal["low", "normal", "high"]


# ============== Message Schemas ==============

class MessageCreate(BaseModel):
    """Request schema for sending a message to a patient."""
    patient_id: str
    content: str = Field(..., min_length=1, max_length=5000)
    message_type: MessageType = "general"
    priority: MessagePriority = "normal"
    template_id: Optional[str] = None


class MessageResponse(BaseModel):
    """Response schema for a message."""
    id: str
    organization_id: str
    patient_id: str
    sender_id: str
    sender_name: str
    sender_role: str
    content: str
    message_type: MessageType
    priority: MessagePriority
    template_id: Optional[str] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class MessageListResponse(BaseModel):
    """Response schema for list of messages."""
    messages: List[MessageResponse]
    total: int
    unread: int


# ============== Template Schemas ==============

class TemplateResponse(BaseModel):
    id: str
    name: str
    category: MessageType
    icon: str
    priority: MessagePriority
    suggest_when: List[str] = []
    content: str


class TemplateListResponse(BaseModel):
    templates: List[TemplateResponse]
    total: int


class SuggestedTemplateResponse(BaseModel):
    """A template relevant to the patient, already filled."""
    template: TemplateResponse
    reason: str
    filled_content: str


class SuggestedTemplateListResponse(BaseModel):
    patient_id: str
    suggestions: List[SuggestedTemplateResponse]


class FilledTemplateResponse(BaseModel):
    """Template text with every placeholder replaced, ready to send."""
    template_id: str
    patient_id: str
    message_type: MessageType
    priority: MessagePriority
    content: str
