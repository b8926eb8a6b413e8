# Visits Feature - Service

from typing import Dict, List, Optional
from datetime import datetime
from bson import ObjectId
from app.core.logging import logger
from app.core.storage import KeyValueStore
from app.features.patients.service import PatientService
from app.features.visits.clinical import evaluate_vital_signs, calculate_bmi, parse_float, parse_int
from app.features.visits.drafts import clear_draft
from app.features.visits.models import Visit
from app.features.visits.schemas import (
    PhysicalExaminationNotes,
    VisitNotes,
    VisitResponse,
    VisitSubmission,
    VisitSubmitResponse,
    VitalSignsNotes,
)
from app.shared.exceptions import NotFoundException, ValidationException


REQUIRED_FIELDS = {
    "visit_type": "Visit type is required",
    "chief_complaint": "Chief complaint is required",
    "diagnosis": "Primary diagnosis is required",
    "treatment_plan": "Treatment plan is required",
}

# Medications that warrant a pharmacist review whenever prescribed
REVIEW_MEDICATIONS = ("warfarin", "insulin", "digoxin", "lithium")


def validate_submission(submission: VisitSubmission) -> Dict[str, str]:
    """Per-field errors for required fields left blank."""
    return {
        field: message
        for field, message in REQUIRED_FIELDS.items()
        if not getattr(submission, field).strip()
    }


def needs_medication_review(medication_list: List[str]) -> bool:
    """Suggest a medication review for high-risk drugs or three or more medications."""
    if len(medication_list) >= 3:
        return True
    return any(
        drug in medication.lower()
        for medication in medication_list
        for drug in REVIEW_MEDICATIONS
    )


def build_visit_fields(
    organization_id: str,
    patient_id: str,
    submission: VisitSubmission,
    recorded_by: Optional[str] = None,
    visit_date: Optional[datetime] = None
) -> dict:
    """
    Flatten a submitted form into stored visit fields.
    
    List fields become comma-joined strings and the clinical narrative is
    nested under `notes`.
    """
    secondary_diagnoses = ", ".join(submission.additional_diagnoses) or submission.secondary_diagnoses
    
    return {
        "organization_id": organization_id,
        "patient_id": patient_id,
        "visit_date": visit_date or datetime.utcnow(),
        "visit_type": submission.visit_type,
        "chief_complaint": submission.chief_complaint,
        "diagnosis": submission.diagnosis,
        "treatment": submission.treatment_plan,
        "blood_pressure": submission.blood_pressure or None,
        "heart_rate": parse_int(submission.heart_rate),
        "temperature": parse_float(submission.temperature),
        "weight": parse_float(submission.weight),
        "height": parse_float(submission.height),
        "bmi": calculate_bmi(submission.weight, submission.height),
        "vital_alerts": evaluate_vital_signs(submission),
        "medications": ", ".join(submission.medication_list),
        "follow_up_date": submission.follow_up_date or None,
        "recorded_by": recorded_by,
        "notes": VisitNotes(
            history_of_present_illness=submission.history_of_present_illness,
            vital_signs=VitalSignsNotes(
                respiratory_rate=submission.respiratory_rate,
                oxygen_saturation=submission.oxygen_saturation,
            ),
            physical_examination=PhysicalExaminationNotes(
                general_appearance=submission.general_appearance,
                cardiovascular_system=submission.cardiovascular_system,
                respiratory_system=submission.respiratory_system,
                gastrointestinal_system=submission.gastrointestinal_system,
                neurological_system=submission.neurological_system,
                musculoskeletal_system=submission.musculoskeletal_system,
            ),
            assessment=submission.assessment,
            secondary_diagnoses=secondary_diagnoses,
            medications=submission.medications,
            patient_instructions=submission.patient_instructions,
            follow_up_date=submission.follow_up_date,
            follow_up_instructions=submission.follow_up_instructions,
            additional_notes=submission.additional_notes,
        ),
    }


class VisitService:
    """Service class for visit operations."""
    
    @staticmethod
    def visit_to_response(visit: Visit) -> VisitResponse:
        return VisitResponse(
            id=str(visit.id),
            organization_id=visit.organization_id,
            patient_id=visit.patient_id,
            visit_date=visit.visit_date,
            visit_type=visit.visit_type,
            chief_complaint=visit.chief_complaint,
            diagnosis=visit.diagnosis,
            treatment=visit.treatment,
            blood_pressure=visit.blood_pressure,
            heart_rate=visit.heart_rate,
            temperature=visit.temperature,
            weight=visit.weight,
            height=visit.height,
            bmi=visit.bmi,
            medications=visit.medications,
            follow_up_date=visit.follow_up_date,
            vital_alerts=visit.vital_alerts,
            notes=visit.notes,
            recorded_by=visit.recorded_by,
            created_at=visit.created_at,
            updated_at=visit.updated_at,
        )
    
    @staticmethod
    async def submit_visit(
        organization_id: str,
        patient_id: str,
        submission: VisitSubmission,
        recorded_by: str,
        draft_store: KeyValueStore
    ) -> VisitSubmitResponse:
        """
        Validate and store a visit, then drop the patient's draft.
        
        Raises:
            ValidationException: If required fields are blank
            NotFoundException: If the patient is not in the organization
        """
        errors = validate_submission(submission)
        if errors:
            logger.info(f"Rejected visit for patient {patient_id}: missing {', '.join(errors)}")
            raise ValidationException(errors, "Please complete the required fields")
        
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        visit = Visit(**build_visit_fields(organization_id, patient_id, submission, recorded_by))
        await visit.insert()
        
        logger.info(f"Recorded {visit.visit_type} visit {visit.id} for patient {patient_id} by {recorded_by}")
        
        await clear_draft(draft_store, patient_id)
        
        review = needs_medication_review(submission.medication_list)
        if review:
            logger.info(f"Medication review suggested for patient {patient_id} ({len(submission.medication_list)} medications)")
        
        return VisitSubmitResponse(
            visit=VisitService.visit_to_response(visit),
            medication_review_suggested=review,
        )
    
    @staticmethod
    async def list_documents(organization_id: str, patient_id: str) -> List[Visit]:
        """Visits for a patient, most recent first."""
        return await Visit.find(
            Visit.organization_id == organization_id,
            Visit.patient_id == patient_id
        ).sort([("visit_date", -1)]).to_list()
    
    @staticmethod
    async def list_visits(organization_id: str, patient_id: str) -> List[VisitResponse]:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        visits = await VisitService.list_documents(organization_id, patient_id)
        return [VisitService.visit_to_response(v) for v in visits]
    
    @staticmethod
    async def get_visit(organization_id: str, patient_id: str, visit_id: str) -> VisitResponse:
        try:
            visit = await Visit.get(ObjectId(visit_id))
        except Exception:
            raise NotFoundException("Visit not found")
        
        if not visit or visit.organization_id != organization_id or visit.patient_id != patient_id:
            raise NotFoundException("Visit not found")
        
        return VisitService.visit_to_response(visit)
