# Lab Results Feature - Router

from fastapi import APIRouter, Depends, status
from app.features.lab_results.schemas import (
    LabResultCreate,
    LabResultResponse,
    LabResultListResponse,
)
from app.features.lab_results.service import LabResultService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User


router = APIRouter(prefix="/patients/{patient_id}/lab-results", tags=["Lab Results"])


@router.post("", response_model=LabResultResponse, status_code=status.HTTP_201_CREATED)
async def create_lab_result(
    patient_id: str,
    data: LabResultCreate,
    current_user: User = Depends(get_current_user)
):
    """Record a lab result for a patient."""
    return await LabResultService.create_lab_result(
        require_organization(current_user), patient_id, data
    )


@router.get("", response_model=LabResultListResponse)
async def list_lab_results(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """List a patient's lab results, most recent first."""
    lab_results = await LabResultService.list_lab_results(
        require_organization(current_user), patient_id
    )
    return LabResultListResponse(lab_results=lab_results, total=len(lab_results))
