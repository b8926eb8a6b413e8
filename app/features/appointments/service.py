# Appointments Feature - Service

from typing import List
from bson import ObjectId
from app.features.appointments.models import Appointment, AppointmentStatus
from app.features.appointments.schemas import AppointmentCreate, AppointmentResponse
from app.features.patients.service import PatientService
from app.core.logging import logger
from app.shared.exceptions import NotFoundException


class AppointmentService:
    """Service class for appointment operations."""
    
    @staticmethod
    def _to_response(appointment: Appointment) -> AppointmentResponse:
        return AppointmentResponse(
            id=str(appointment.id),
            organization_id=appointment.organization_id,
            patient_id=appointment.patient_id,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            doctor_name=appointment.doctor_name,
            type=appointment.type,
            status=appointment.status,
            notes=appointment.notes,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )
    
    @staticmethod
    async def create_appointment(
        organization_id: str,
        patient_id: str,
        data: AppointmentCreate
    ) -> AppointmentResponse:
        """Schedule an appointment for a patient."""
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        appointment = Appointment(
            organization_id=organization_id,
            patient_id=patient_id,
            **data.model_dump(),
        )
        await appointment.insert()
        
        logger.info(f"Scheduled {appointment.type} for patient {patient_id} on {appointment.appointment_date}")
        return AppointmentService._to_response(appointment)
    
    @staticmethod
    async def list_documents(organization_id: str, patient_id: str) -> List[Appointment]:
        """Appointments for a patient, earliest first."""
        return await Appointment.find(
            Appointment.organization_id == organization_id,
            Appointment.patient_id == patient_id
        ).sort([("appointment_date", 1)]).to_list()
    
    @staticmethod
    async def list_appointments(organization_id: str, patient_id: str) -> List[AppointmentResponse]:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        appointments = await AppointmentService.list_documents(organization_id, patient_id)
        return [AppointmentService._to_response(a) for a in appointments]
    
    @staticmethod
    async def update_status(
        organization_id: str,
        patient_id: str,
        appointment_id: str,
        status: AppointmentStatus
    ) -> AppointmentResponse:
        try:
            appointment = await Appointment.get(ObjectId(appointment_id))
        except Exception:
            raise NotFoundException("Appointment not found")
        
        if (
            not appointment
            or appointment.organization_id != organization_id
            or appointment.patient_id != patient_id
        ):
            raise NotFoundException("Appointment not found")
        
        appointment.status = status
        appointment.update_timestamp()
        await appointment.save()
        
        logger.info(f"Appointment {appointment_id} is now {status}")
        return AppointmentService._to_response(appointment)
