# Patient Management Feature - Router

from fastapi import APIRouter, Depends, status
from app.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
    PatientListResponse,
)
from app.features.patients.service import PatientService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    current_user: User = Depends(get_current_user)
):
    """
    Register a new patient in the current user's organization.
    
    Returns the created patient with their generated Patient ID.
    """
    organization_id = require_organization(current_user)
    patient = await PatientService.create_patient(organization_id, request)
    return PatientService.patient_to_response(patient)


@router.get("", response_model=PatientListResponse)
async def list_patients(
    include_inactive: bool = False,
    current_user: User = Depends(get_current_user)
):
    """
    List all patients for the current user's organization.
    
    - **include_inactive**: Include deactivated patients (default: false)
    """
    organization_id = require_organization(current_user)
    patients = await PatientService.get_patients_by_organization(
        organization_id,
        include_inactive=include_inactive
    )
    
    return PatientListResponse(
        patients=[PatientService.patient_to_response(p) for p in patients],
        total=len(patients)
    )


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """Get a specific patient by their Patient ID."""
    organization_id = require_organization(current_user)
    patient = await PatientService.get_patient_by_id(patient_id, organization_id)
    return PatientService.patient_to_response(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: str,
    request: UpdatePatientRequest,
    current_user: User = Depends(get_current_user)
):
    """Update a patient's information."""
    organization_id = require_organization(current_user)
    patient = await PatientService.update_patient(patient_id, organization_id, request)
    return PatientService.patient_to_response(patient)


@router.delete("/{patient_id}", response_model=MessageResponse)
async def deactivate_patient(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """
    Deactivate a patient.
    
    The patient disappears from the default list; visits, prescriptions and
    other records are kept.
    """
    organization_id = require_organization(current_user)
    await PatientService.deactivate_patient(patient_id, organization_id)
    return MessageResponse(message=f"Patient {patient_id} has been deactivated")
