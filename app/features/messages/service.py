# Messages Feature - Service

from typing import List, Optional
from datetime import datetime
from bson import ObjectId
from app.core.logging import logger
from app.features.auth.models import User
from app.features.messages.models import Message
from app.features.messages.schemas import (
    FilledTemplateResponse,
    MessageCreate,
    MessageResponse,
    SuggestedTemplateResponse,
    TemplateResponse,
)
from app.features.messages.snapshot import build_patient_snapshot
from app.features.messages.template_engine import fill_template, get_suggested_templates
from app.features.messages.templates import MessageTemplate, get_template, list_templates
from app.features.patients.service import PatientService
from app.shared.exceptions import NotFoundException


class MessageService:
    """Service class for patient messaging and message templates."""
    
    @staticmethod
    def message_to_response(message: Message) -> MessageResponse:
        return MessageResponse(
            id=str(message.id),
            organization_id=message.organization_id,
            patient_id=message.patient_id,
            sender_id=message.sender_id,
            sender_name=message.sender_name,
            sender_role=message.sender_role,
            content=message.content,
            message_type=message.message_type,
            priority=message.priority,
            template_id=message.template_id,
            is_read=message.is_read,
            read_at=message.read_at,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )
    
    @staticmethod
    def template_to_response(template: MessageTemplate) -> TemplateResponse:
        return TemplateResponse(
            id=template.id,
            name=template.name,
            category=template.category,
            icon=template.icon,
            priority=template.priority,
            suggest_when=list(template.suggest_when),
            content=template.content,
        )
    
    @staticmethod
    async def send_message(
        organization_id: str,
        sender: User,
        request: MessageCreate
    ) -> MessageResponse:
        """
        Store a message for a patient.
        
        Raises:
            NotFoundException: If the patient or template does not exist
        """
        await PatientService.get_patient_by_id(request.patient_id, organization_id)
        
        if request.template_id and not get_template(request.template_id):
            raise NotFoundException(f"Template {request.template_id} not found")
        
        message = Message(
            organization_id=organization_id,
            patient_id=request.patient_id,
            sender_id=str(sender.id),
            sender_name=sender.name,
            sender_role=sender.role,
            content=request.content,
            message_type=request.message_type,
            priority=request.priority,
            template_id=request.template_id,
        )
        await message.insert()
        
        logger.info(f"Message {message.id} sent to patient {request.patient_id} by {sender.email}"
                    + (f" (template {request.template_id})" if request.template_id else ""))
        
        return MessageService.message_to_response(message)
    
    @staticmethod
    async def get_messages_for_patient(organization_id: str, patient_id: str) -> List[MessageResponse]:
        """A patient's messages, newest first."""
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        messages = await Message.find(
            Message.organization_id == organization_id,
            Message.patient_id == patient_id
        ).sort([("created_at", -1)]).to_list()
        
        return [MessageService.message_to_response(m) for m in messages]
    
    @staticmethod
    async def mark_as_read(organization_id: str, message_id: str) -> MessageResponse:
        try:
            message = await Message.get(ObjectId(message_id))
        except Exception:
            raise NotFoundException("Message not found")
        
        if not message or message.organization_id != organization_id:
            raise NotFoundException("Message not found")
        
        if not message.is_read:
            message.is_read = True
            message.read_at = datetime.utcnow()
            message.update_timestamp()
            await message.save()
            logger.info(f"Message {message_id} marked as read")
        
        return MessageService.message_to_response(message)
    
    # ==================== Templates ====================
    
    @staticmethod
    def get_templates(category: Optional[str] = None) -> List[TemplateResponse]:
        return [MessageService.template_to_response(t) for t in list_templates(category)]
    
    @staticmethod
    async def get_suggested_templates(organization_id: str, patient_id: str) -> List[SuggestedTemplateResponse]:
        snapshot = await build_patient_snapshot(patient_id, organization_id)
        suggestions = get_suggested_templates(snapshot)
        
        logger.info(f"Suggested {len(suggestions)} templates for patient {patient_id}: "
                    f"{', '.join(s.template.id for s in suggestions) or 'none'}")
        
        return [
            SuggestedTemplateResponse(
                template=MessageService.template_to_response(s.template),
                reason=s.reason,
                filled_content=s.filled_content,
            )
            for s in suggestions
        ]
    
    @staticmethod
    async def fill_template_for_patient(
        organization_id: str,
        template_id: str,
        patient_id: str
    ) -> FilledTemplateResponse:
        """
        Fill a template with the patient's most recent records.
        
        Raises:
            NotFoundException: If the template or patient does not exist
        """
        template = get_template(template_id)
        if not template:
            raise NotFoundException(f"Template {template_id} not found")
        
        snapshot = await build_patient_snapshot(patient_id, organization_id)
        
        return FilledTemplateResponse(
            template_id=template.id,
            patient_id=patient_id,
            message_type=template.category,
            priority=template.priority,
            content=fill_template(template.content, snapshot),
        )
