# Vaccinations Feature - Router

from fastapi import APIRouter, Depends, Query, status
from app.features.vaccinations.schemas import (
    VaccinationCreate,
    VaccinationUpdate,
    VaccinationResponse,
    VaccinationListResponse,
    VaccinationStatisticsResponse,
)
from app.features.vaccinations.service import VaccinationService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/patients/{patient_id}/vaccinations", tags=["Vaccinations"])
organization_router = APIRouter(prefix="/vaccinations", tags=["Vaccinations"])


@router.post("", response_model=VaccinationResponse, status_code=status.HTTP_201_CREATED)
async def create_vaccination(
    patient_id: str,
    data: VaccinationCreate,
    current_user: User = Depends(get_current_user)
):
    """Record an administered vaccine dose."""
    return await VaccinationService.create_vaccination(
        require_organization(current_user), patient_id, data
    )


@router.get("", response_model=VaccinationListResponse)
async def list_vaccinations(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """List a patient's vaccination history."""
    vaccinations = await VaccinationService.list_vaccinations(
        require_organization(current_user), patient_id
    )
    return VaccinationListResponse(vaccinations=vaccinations, total=len(vaccinations))


@router.put("/{vaccination_id}", response_model=VaccinationResponse)
async def update_vaccination(
    patient_id: str,
    vaccination_id: str,
    data: VaccinationUpdate,
    current_user: User = Depends(get_current_user)
):
    """Correct a vaccination record."""
    return await VaccinationService.update_vaccination(
        require_organization(current_user), patient_id, vaccination_id, data
    )


@router.delete("/{vaccination_id}", response_model=MessageResponse)
async def delete_vaccination(
    patient_id: str,
    vaccination_id: str,
    current_user: User = Depends(get_current_user)
):
    """Delete a vaccination record entered in error."""
    await VaccinationService.delete_vaccination(
        require_organization(current_user), patient_id, vaccination_id
    )
    return MessageResponse(message="Vaccination deleted successfully")


@organization_router.get("/due-soon", response_model=VaccinationListResponse)
async def get_vaccinations_due_soon(
    days_ahead: int = Query(30, ge=1, le=365),
    current_user: User = Depends(get_current_user)
):
    """Vaccinations whose next dose is due within `days_ahead` days."""
    vaccinations = await VaccinationService.get_due_soon(
        require_organization(current_user), days_ahead
    )
    return VaccinationListResponse(vaccinations=vaccinations, total=len(vaccinations))


@organization_router.get("/statistics", response_model=VaccinationStatisticsResponse)
async def get_vaccination_statistics(current_user: User = Depends(get_current_user)):
    """Organization-wide vaccination counters."""
    return await VaccinationService.get_statistics(require_organization(current_user))
