# Visits Feature - Schemas

from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, Field


# ============== Visit Form ==============

class VisitDraft(BaseModel):
    """
    In-progress visit record as typed into the recording form.
    
    Every field is free text; vital signs stay strings until submission so
    that partially typed values never fail validation.
    """
    visit_type: str = "consultation"
    chief_complaint: str = ""
    history_of_present_illness: str = ""
    
    # Vital signs
    blood_pressure: str = ""  # "systolic/diastolic"
    heart_rate: str = ""
    temperature: str = ""  # °C
    weight: str = ""  # kg
    height: str = ""  # cm
    respiratory_rate: str = ""
    oxygen_saturation: str = ""
    
    # Physical examination
    general_appearance: str = ""
    cardiovascular_system: str = ""
    respiratory_system: str = ""
    gastrointestinal_system: str = ""
    neurological_system: str = ""
    musculoskeletal_system: str = ""
    
    # Assessment and plan
    assessment: str = ""
    diagnosis: str = ""
    secondary_diagnoses: str = ""
    treatment_plan: str = ""
    medications: str = ""
    
    # Follow-up and instructions
    patient_instructions: str = ""
    follow_up_date: str = ""
    follow_up_instructions: str = ""
    
    additional_notes: str = ""


class VisitSubmission(VisitDraft):
    """Visit form plus the list fields kept outside the form itself."""
    additional_diagnoses: List[str] = Field(default_factory=list)
    medication_list: List[str] = Field(default_factory=list)


class DraftSnapshot(VisitSubmission):
    """Serialized draft as written to the key/value store."""
    timestamp: datetime


# ============== Evaluation ==============

class MedicationSuggestionResponse(BaseModel):
    name: str
    dosage: str
    frequency: str
    duration: str
    route: str
    category: str
    formatted: str


class VisitEvaluationResponse(BaseModel):
    """Derived state for the current form values."""
    bmi: Optional[float] = None
    alerts: List[str] = []
    suggested_medications: List[MedicationSuggestionResponse] = []
    treatment_instructions: Optional[str] = None


# ============== Drafts ==============

class DraftLoadResponse(BaseModel):
    """
    Result of opening the recording view.
    
    - **restorable**: a draft younger than the cutoff is offered in `draft`
    - **expired**: an old draft was found and discarded
    - **none**: nothing stored
    """
    status: Literal["restorable", "expired", "none"]
    draft: Optional[DraftSnapshot] = None


class DraftSaveResponse(BaseModel):
    saved: bool
    last_saved: Optional[datetime] = None


# ============== Stored Visit ==============

class VitalSignsNotes(BaseModel):
    respiratory_rate: str = ""
    oxygen_saturation: str = ""


class PhysicalExaminationNotes(BaseModel):
    general_appearance: str = ""
    cardiovascular_system: str = ""
    respiratory_system: str = ""
    gastrointestinal_system: str = ""
    neurological_system: str = ""
    musculoskeletal_system: str = ""


class VisitNotes(BaseModel):
    """Clinical narrative stored alongside the structured visit fields."""
    history_of_present_illness: str = ""
    vital_signs: VitalSignsNotes = Field(default_factory=VitalSignsNotes)
    physical_examination: PhysicalExaminationNotes = Field(default_factory=PhysicalExaminationNotes)
    assessment: str = ""
    secondary_diagnoses: str = ""
    medications: str = ""
    patient_instructions: str = ""
    follow_up_date: str = ""
    follow_up_instructions: str = ""
    additional_notes: str = ""


class VisitResponse(BaseModel):
    id: str
    organization_id: str
    patient_id: str
    visit_date: datetime
    visit_type: str
    chief_complaint: str
    diagnosis: str
    treatment: str
    blood_pressure: Optional[str] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    bmi: Optional[float] = None
    medications: str = ""
    follow_up_date: Optional[str] = None
    vital_alerts: List[str] = []
    notes: VisitNotes
    recorded_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VisitSubmitResponse(BaseModel):
    visit: VisitResponse
    medication_review_suggested: bool = False
    message: str = "Visit recorded successfully"


class VisitListResponse(BaseModel):
    visits: List[VisitResponse]
    total: int
