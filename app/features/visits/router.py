# Visits Feature - Router

from fastapi import APIRouter, Depends, status
from app.core.storage import KeyValueStore
from app.data.medication_suggestions import format_medication
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User
from app.features.patients.models import Patient
from app.features.visits.clinical import evaluate_visit
from app.features.visits.dependencies import get_draft_store, get_visit_patient
from app.features.visits.drafts import clear_draft, load_draft, save_draft
from app.features.visits.schemas import (
    DraftLoadResponse,
    DraftSaveResponse,
    MedicationSuggestionResponse,
    VisitDraft,
    VisitEvaluationResponse,
    VisitListResponse,
    VisitResponse,
    VisitSubmission,
    VisitSubmitResponse,
)
from app.features.visits.service import VisitService
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/patients/{patient_id}/visits", tags=["Visits"])


# ==================== Recording Form ====================
# Static routes must be registered before /{visit_id}

@router.post("/evaluate", response_model=VisitEvaluationResponse)
async def evaluate_visit_form(
    patient_id: str,
    values: VisitDraft,
    current_user: User = Depends(get_current_user)
):
    """
    Derived state for the current form values: BMI, vital-sign alerts and
    medication suggestions for the diagnosis.
    """
    evaluation = evaluate_visit(values)
    
    return VisitEvaluationResponse(
        bmi=evaluation.bmi,
        alerts=evaluation.alerts,
        suggested_medications=[
            MedicationSuggestionResponse(
                name=med.name,
                dosage=med.dosage,
                frequency=med.frequency,
                duration=med.duration,
                route=med.route,
                category=med.category,
                formatted=format_medication(med),
            )
            for med in evaluation.suggested_medications
        ],
        treatment_instructions=evaluation.treatment_instructions,
    )


@router.get("/draft", response_model=DraftLoadResponse)
async def get_visit_draft(
    patient_id: str,
    patient: Patient = Depends(get_visit_patient),
    store: KeyValueStore = Depends(get_draft_store)
):
    """
    Load the saved draft when the recording view opens.
    
    Drafts older than 24 hours are discarded and reported as `expired`.
    """
    result = await load_draft(store, patient_id)
    return DraftLoadResponse(status=result.status, draft=result.snapshot)


@router.put("/draft", response_model=DraftSaveResponse)
async def save_visit_draft(
    patient_id: str,
    submission: VisitSubmission,
    patient: Patient = Depends(get_visit_patient),
    store: KeyValueStore = Depends(get_draft_store)
):
    """
    Autosave the recording form.
    
    Nothing is written until the chief complaint, diagnosis or treatment plan
    has content.
    """
    saved_at = await save_draft(store, patient_id, submission)
    return DraftSaveResponse(saved=saved_at is not None, last_saved=saved_at)


@router.delete("/draft", response_model=MessageResponse)
async def discard_visit_draft(
    patient_id: str,
    patient: Patient = Depends(get_visit_patient),
    store: KeyValueStore = Depends(get_draft_store)
):
    """Discard the saved draft."""
    await clear_draft(store, patient_id)
    return MessageResponse(message="Draft discarded")


# ==================== Visits ====================

@router.post("", response_model=VisitSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_visit(
    patient_id: str,
    submission: VisitSubmission,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_draft_store)
):
    """
    Record a visit.
    
    Chief complaint, diagnosis and treatment plan are required. On success the
    patient's draft is cleared.
    """
    return await VisitService.submit_visit(
        organization_id=require_organization(current_user),
        patient_id=patient_id,
        submission=submission,
        recorded_by=current_user.name,
        draft_store=store,
    )


@router.get("", response_model=VisitListResponse)
async def list_visits(
    patient_id: str,
    current_user: User = Depends(get_current_user)
):
    """List a patient's visits, most recent first."""
    visits = await VisitService.list_visits(require_organization(current_user), patient_id)
    return VisitListResponse(visits=visits, total=len(visits))


@router.get("/{visit_id}", response_model=VisitResponse)
async def get_visit(
    patient_id: str,
    visit_id: str,
    current_user: User = Depends(get_current_user)
):
    """Get a single visit."""
    return await VisitService.get_visit(require_organization(current_user), patient_id, visit_id)
