"""Test visit submission validation and payload flattening."""

import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.features.visits.clinical import FEVER, TACHYCARDIA
from app.features.visits.schemas import VisitSubmission
from app.features.visits.service import build_visit_fields, needs_medication_review, validate_submission


def test_required_fields():
    errors = validate_submission(VisitSubmission(visit_type="", chief_complaint="  "))
    assert set(errors) == {"visit_type", "chief_complaint", "diagnosis", "treatment_plan"}
    
    complete = VisitSubmission(chief_complaint="Cough", diagnosis="Bronchitis", treatment_plan="Rest")
    assert validate_submission(complete) == {}


def test_medication_review_hint():
    assert needs_medication_review(["Warfarin 5mg - Once daily"])
    assert needs_medication_review(["INSULIN glargine"])
    assert needs_medication_review(["A", "B", "C"])
    assert not needs_medication_review(["Paracetamol", "ORS"])
    assert not needs_medication_review([])


def test_build_visit_fields_flattens_lists_and_nests_notes():
    submission = VisitSubmission(
        chief_complaint="Fever and cough",
        history_of_present_illness="Three days of fever",
        blood_pressure="",
        heart_rate="104 bpm",
        temperature="38.6",
        weight="70",
        height="170",
        respiratory_rate="18",
        oxygen_saturation="97",
        cardiovascular_system="Normal heart sounds",
        diagnosis="Pneumonia",
        secondary_diagnoses="ignored when the list is set",
        treatment_plan="Oral antibiotics",
        medications="free text",
        additional_diagnoses=["Dehydration", "Anaemia"],
        medication_list=["Amoxicillin 500mg", "Paracetamol 1g"],
        follow_up_date="2025-03-10",
    )
    visit_date = datetime(2025, 3, 3, 9, 0)
    
    fields = build_visit_fields("org-1", "P00001", submission, recorded_by="Dr. Mensah", visit_date=visit_date)
    
    assert fields["organization_id"] == "org-1"
    assert fields["visit_date"] == visit_date
    assert fields["treatment"] == "Oral antibiotics"
    assert fields["medications"] == "Amoxicillin 500mg, Paracetamol 1g"
    assert fields["heart_rate"] == 104
    assert fields["temperature"] == 38.6
    assert fields["bmi"] == 24.2
    assert fields["blood_pressure"] is None
    assert fields["vital_alerts"] == [TACHYCARDIA, FEVER]
    assert fields["follow_up_date"] == "2025-03-10"
    
    notes = fields["notes"]
    assert notes.secondary_diagnoses == "Dehydration, Anaemia"
    assert notes.history_of_present_illness == "Three days of fever"
    assert notes.vital_signs.respiratory_rate == "18"
    assert notes.physical_examination.cardiovascular_system == "Normal heart sounds"
    assert notes.medications == "free text"


def test_secondary_diagnoses_fall_back_to_free_text():
    submission = VisitSubmission(
        chief_complaint="Headache",
        diagnosis="Migraine",
        treatment_plan="Analgesia",
        secondary_diagnoses="Tension headache",
    )
    
    fields = build_visit_fields("org-1", "P00001", submission)
    
    assert fields["notes"].secondary_diagnoses == "Tension headache"
    assert fields["medications"] == ""
    assert fields["heart_rate"] is None
    assert fields["follow_up_date"] is None
