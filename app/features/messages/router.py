# Messages Feature - Router

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from app.features.messages.schemas import (
    FilledTemplateResponse,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    MessageType,
    SuggestedTemplateListResponse,
    TemplateListResponse,
)
from app.features.messages.service import MessageService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User


router = APIRouter(prefix="/messages", tags=["Messages"])


# ============== Messages ==============

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: MessageCreate,
    current_user: User = Depends(get_current_user)
):
    """
    Send a message to a patient.
    
    Set `template_id` when the content was produced from a template.
    """
    return await MessageService.send_message(
        organization_id=require_organization(current_user),
        sender=current_user,
        request=request
    )


@router.get("/patient/{patient_id}", response_model=MessageListResponse)
async def get_patient_messages(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """Get a patient's messages, newest first."""
    messages = await MessageService.get_messages_for_patient(require_organization(current_user), patient_id)
    
    return MessageListResponse(
        messages=messages,
        total=len(messages),
        unread=sum(1 for m in messages if not m.is_read)
    )


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: str,
    current_user: User = Depends(get_current_user)
):
    """Mark a message as read."""
    return await MessageService.mark_as_read(require_organization(current_user), message_id)


# ============== Templates ==============

@router.get("/templates", response_model=TemplateListResponse)
async def get_templates(
    category: Optional[MessageType] = Query(None, description="Filter by template category"),
    current_user: User = Depends(get_current_user)
):
    """List the available message templates."""
    templates = MessageService.get_templates(category)
    return TemplateListResponse(templates=templates, total=len(templates))


@router.get("/templates/suggested/{patient_id}", response_model=SuggestedTemplateListResponse)
async def get_suggested_templates(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """
    Templates relevant to the patient's current situation, filled with their data.
    
    At most three suggestions, in priority order: upcoming appointment, recent
    lab results, active prescription, follow-up due.
    """
    suggestions = await MessageService.get_suggested_templates(require_organization(current_user), patient_id)
    return SuggestedTemplateListResponse(patient_id=patient_id, suggestions=suggestions)


@router.post("/templates/{template_id}/fill/{patient_id}", response_model=FilledTemplateResponse)
async def fill_template(
    template_id: str,
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """Fill a template with the patient's latest appointment, prescription, lab results and visit."""
    return await MessageService.fill_template_for_patient(
        organization_id=require_organization(current_user),
        template_id=template_id,
        patient_id=patient_id
    )
