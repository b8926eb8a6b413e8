# Prescriptions Feature - Router

from fastapi import APIRouter, Depends, status
from app.features.prescriptions.schemas import (
    PrescriptionCreate,
    PrescriptionStatusUpdate,
    PrescriptionResponse,
    PrescriptionListResponse,
)
from app.features.prescriptions.service import PrescriptionService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User


router = APIRouter(prefix="/patients/{patient_id}/prescriptions", tags=["Prescriptions"])


@router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription(
    patient_id: str,
    data: PrescriptionCreate,
    current_user: User = Depends(get_current_user)
):
    """Prescribe a medication to a patient."""
    return await PrescriptionService.create_prescription(
        require_organization(current_user), patient_id, current_user.name, data
    )


@router.get("", response_model=PrescriptionListResponse)
async def list_prescriptions(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """List a patient's prescriptions, newest first."""
    prescriptions = await PrescriptionService.list_prescriptions(
        require_organization(current_user), patient_id
    )
    return PrescriptionListResponse(prescriptions=prescriptions, total=len(prescriptions))


@router.patch("/{prescription_id}", response_model=PrescriptionResponse)
async def update_prescription_status(
    patient_id: str,
    prescription_id: str,
    update: PrescriptionStatusUpdate,
    current_user: User = Depends(get_current_user)
):
    """Complete or discontinue a prescription."""
    return await PrescriptionService.update_status(
        require_organization(current_user), patient_id, prescription_id, update.status
    )
