# Appointments Feature - Router

from fastapi import APIRouter, Depends, status
from app.features.appointments.schemas import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentResponse,
    AppointmentListResponse,
)
from app.features.appointments.service import AppointmentService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User


router = APIRouter(prefix="/patients/{patient_id}/appointments", tags=["Appointments"])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    patient_id: str,
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user)
):
    """Schedule an appointment for a patient."""
    return await AppointmentService.create_appointment(
        require_organization(current_user), patient_id, data
    )


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """List a patient's appointments, earliest first."""
    appointments = await AppointmentService.list_appointments(
        require_organization(current_user), patient_id
    )
    return AppointmentListResponse(appointments=appointments, total=len(appointments))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment_status(
    patient_id: str,
    appointment_id: str,
    update: AppointmentStatusUpdate,
    current_user: User = Depends(get_current_user)
):
    """Confirm, complete or cancel an appointment."""
    return await AppointmentService.update_status(
        require_organization(current_user), patient_id, appointment_id, update.status
    )
