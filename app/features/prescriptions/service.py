# Prescriptions Feature - Service

from typing import List
from bson import ObjectId
from app.features.prescriptions.models import Prescription, PrescriptionStatus
from app.features.prescriptions.schemas import PrescriptionCreate, PrescriptionResponse
from app.features.patients.service import PatientService
from app.core.logging import logger
from app.shared.exceptions import NotFoundException


class PrescriptionService:
    """Service class for prescription operations."""
    
    @staticmethod
    def _to_response(prescription: Prescription) -> PrescriptionResponse:
        return PrescriptionResponse(
            id=str(prescription.id),
            organization_id=prescription.organization_id,
            patient_id=prescription.patient_id,
            visit_id=prescription.visit_id,
            medication_name=prescription.medication_name,
            dosage=prescription.dosage,
            frequency=prescription.frequency,
            duration=prescription.duration,
            instructions=prescription.instructions,
            prescribed_by=prescription.prescribed_by,
            start_date=prescription.start_date,
            status=prescription.status,
            created_at=prescription.created_at,
            updated_at=prescription.updated_at,
        )
    
    @staticmethod
    async def create_prescription(
        organization_id: str,
        patient_id: str,
        prescribed_by: str,
        data: PrescriptionCreate
    ) -> PrescriptionResponse:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        prescription = Prescription(
            organization_id=organization_id,
            patient_id=patient_id,
            prescribed_by=prescribed_by,
            **data.model_dump(),
        )
        await prescription.insert()
        
        logger.info(f"Prescribed {prescription.medication_name} to patient {patient_id} by {prescribed_by}")
        return PrescriptionService._to_response(prescription)
    
    @staticmethod
    async def list_documents(organization_id: str, patient_id: str) -> List[Prescription]:
        """Prescriptions for a patient, newest first."""
        return await Prescription.find(
            Prescription.organization_id == organization_id,
            Prescription.patient_id == patient_id
        ).sort([("created_at", -1)]).to_list()
    
    @staticmethod
    async def list_prescriptions(organization_id: str, patient_id: str) -> List[PrescriptionResponse]:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        prescriptions = await PrescriptionService.list_documents(organization_id, patient_id)
        return [PrescriptionService._to_response(p) for p in prescriptions]
    
    @staticmethod
    async def update_status(
        organization_id: str,
        patient_id: str,
        prescription_id: str,
        status: PrescriptionStatus
    ) -> PrescriptionResponse:
        try:
            prescription = await Prescription.get(ObjectId(prescription_id))
        except Exception:
            raise NotFoundException("Prescription not found")
        
        if (
            not prescription
            or prescription.organization_id != organization_id
            or prescription.patient_id != patient_id
        ):
            raise NotFoundException("Prescription not found")
        
        prescription.status = status
        prescription.update_timestamp()
        await prescription.save()
        
        logger.info(f"Prescription {prescription_id} is now {status}")
        return PrescriptionService._to_response(prescription)
