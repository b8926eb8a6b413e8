# Patient Management Feature - Service

from typing import List
from app.features.patients.models import Patient
from app.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
)
from app.core.logging import logger
from app.shared.exceptions import NotFoundException, ConflictException


class PatientService:
    """Service class for patient management operations."""
    
    @staticmethod
    async def generate_patient_id(organization_id: str) -> str:
        """Generate the next patient ID for an organization (e.g., P00001)."""
        patient_count = await Patient.find(Patient.organization_id == organization_id).count()
        return f"P{patient_count + 1:05d}"
    
    @staticmethod
    async def create_patient(organization_id: str, request: CreatePatientRequest) -> Patient:
        """Register a new patient for an organization."""
        if request.email:
            existing_patient = await Patient.find_one(
                Patient.organization_id == organization_id,
                Patient.email == request.email
            )
            if existing_patient:
                raise ConflictException("A patient with this email already exists in your organization")
        
        patient_id = await PatientService.generate_patient_id(organization_id)
        
        patient = Patient(
            patient_id=patient_id,
            organization_id=organization_id,
            **request.model_dump(),
        )
        await patient.insert()
        
        logger.info(f"Created patient {patient_id} for organization {organization_id}")
        return patient
    
    @staticmethod
    async def get_patients_by_organization(
        organization_id: str,
        include_inactive: bool = False
    ) -> List[Patient]:
        """Get all patients for an organization, newest first."""
        query = Patient.find(Patient.organization_id == organization_id)
        
        if not include_inactive:
            query = query.find(Patient.is_active == True)
        
        return await query.sort(-Patient.created_at).to_list()
    
    @staticmethod
    async def get_patient_by_id(patient_id: str, organization_id: str) -> Patient:
        """Get a patient by their patient_id within an organization."""
        patient = await Patient.find_one(
            Patient.patient_id == patient_id,
            Patient.organization_id == organization_id
        )
        
        if not patient:
            raise NotFoundException("Patient not found")
        
        return patient
    
    @staticmethod
    async def update_patient(
        patient_id: str,
        organization_id: str,
        request: UpdatePatientRequest
    ) -> Patient:
        """Update patient information."""
        patient = await PatientService.get_patient_by_id(patient_id, organization_id)
        
        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(patient, field, value)
        
        patient.update_timestamp()
        await patient.save()
        
        logger.info(f"Updated patient {patient_id}")
        return patient
    
    @staticmethod
    async def deactivate_patient(patient_id: str, organization_id: str) -> Patient:
        """Deactivate a patient; clinical history is retained."""
        patient = await PatientService.get_patient_by_id(patient_id, organization_id)
        patient.is_active = False
        patient.update_timestamp()
        await patient.save()
        
        logger.info(f"Deactivated patient {patient_id}")
        return patient
    
    @staticmethod
    def patient_to_response(patient: Patient) -> PatientResponse:
        """Convert Patient model to response schema."""
        return PatientResponse(
            id=str(patient.id),
            patient_id=patient.patient_id,
            organization_id=patient.organization_id,
            title=patient.title,
            first_name=patient.first_name,
            last_name=patient.last_name,
            date_of_birth=patient.date_of_birth,
            gender=patient.gender,
            phone=patient.phone,
            email=patient.email,
            address=patient.address,
            allergies=patient.allergies or [],
            medical_history=patient.medical_history,
            is_active=patient.is_active,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )
