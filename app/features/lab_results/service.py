# Lab Results Feature - Service

from typing import List
from app.features.lab_results.models import LabResult
from app.features.lab_results.schemas import LabResultCreate, LabResultResponse
from app.features.patients.service import PatientService
from app.core.logging import logger


class LabResultService:
    """Service class for lab result operations."""
    
    @staticmethod
    def _to_response(lab_result: LabResult) -> LabResultResponse:
        return LabResultResponse(
            id=str(lab_result.id),
            organization_id=lab_result.organization_id,
            patient_id=lab_result.patient_id,
            test_name=lab_result.test_name,
            test_date=lab_result.test_date,
            result=lab_result.result,
            unit=lab_result.unit,
            reference_range=lab_result.reference_range,
            status=lab_result.status,
            notes=lab_result.notes,
            created_at=lab_result.created_at,
            updated_at=lab_result.updated_at,
        )
    
    @staticmethod
    async def create_lab_result(
        organization_id: str,
        patient_id: str,
        data: LabResultCreate
    ) -> LabResultResponse:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        lab_result = LabResult(
            organization_id=organization_id,
            patient_id=patient_id,
            **data.model_dump(),
        )
        await lab_result.insert()
        
        logger.info(f"Recorded {lab_result.test_name} ({lab_result.status}) for patient {patient_id}")
        return LabResultService._to_response(lab_result)
    
    @staticmethod
    async def list_documents(organization_id: str, patient_id: str) -> List[LabResult]:
        """Lab results for a patient, most recent test first."""
        return await LabResult.find(
            LabResult.organization_id == organization_id,
            LabResult.patient_id == patient_id
        ).sort([("test_date", -1)]).to_list()
    
    @staticmethod
    async def list_lab_results(organization_id: str, patient_id: str) -> List[LabResultResponse]:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        lab_results = await LabResultService.list_documents(organization_id, patient_id)
        return [LabResultService._to_response(r) for r in lab_results]
