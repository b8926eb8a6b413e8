"""Test message template filling and suggestion ranking."""

import sys
from datetime import date, datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.features.messages.snapshot import (
    AppointmentInfo,
    LabResultInfo,
    PatientClinicalSnapshot,
    PatientInfo,
    PrescriptionInfo,
    VisitInfo,
)
from app.features.messages.template_engine import (
    TOKEN_RESOLVERS,
    FillContext,
    fill_template,
    get_suggested_templates,
)
from app.features.messages.templates import MESSAGE_TEMPLATES, get_template, list_templates


# Monday
NOW = datetime(2025, 3, 3, 9, 0, 0)


def full_snapshot(**overrides) -> PatientClinicalSnapshot:
    data = dict(
        as_of=NOW,
        patient=PatientInfo(patient_id="P00001", first_name="Amina", last_name="Okafor"),
        organization_name="Lakeside Clinic",
        appointments=[
            AppointmentInfo(
                appointment_date=date(2025, 3, 5),
                appointment_time="10:30",
                doctor_name="Dr. Mensah",
                type="consultation",
                status="scheduled",
            ),
        ],
        prescriptions=[
            PrescriptionInfo(medication_name="Metformin", dosage="500mg", frequency="Twice daily", status="active"),
        ],
        lab_results=[
            LabResultInfo(test_name="HbA1c", test_date=datetime(2025, 3, 1, 8, 0), result="8.1%", status="abnormal"),
            LabResultInfo(test_name="Lipid panel", test_date=datetime(2025, 2, 20), status="normal"),
            LabResultInfo(test_name="Creatinine", test_date=datetime(2025, 2, 10), status="normal"),
            LabResultInfo(test_name="TSH", test_date=datetime(2025, 1, 5), status="normal"),
        ],
        visits=[
            VisitInfo(
                visit_date=datetime(2025, 2, 24, 14, 0),
                chief_complaint="Increased thirst",
                diagnosis="Type 2 diabetes",
                follow_up_date="2025-03-06",
            ),
        ],
    )
    data.update(overrides)
    return PatientClinicalSnapshot(**data)


def unfilled_tokens(text: str):
    return [token for token in TOKEN_RESOLVERS if "{" + token + "}" in text]


def test_every_template_is_completely_filled():
    for snapshot in (PatientClinicalSnapshot(as_of=NOW), full_snapshot()):
        for template in MESSAGE_TEMPLATES:
            filled = fill_template(template.content, snapshot)
            assert unfilled_tokens(filled) == [], template.id


def test_every_token_resolves_without_data():
    for token in TOKEN_RESOLVERS:
        for context in (FillContext(), None):
            filled = fill_template("{" + token + "}", PatientClinicalSnapshot(as_of=NOW), context)
            assert filled.strip(), token
            assert "{" not in filled, token


def test_fill_with_snapshot_data():
    filled = fill_template(get_template("appointment-reminder").content, full_snapshot())
    
    assert filled.startswith("Dear Amina Okafor,")
    assert "Wednesday, March 5, 2025 at 10:30 with Dr. Mensah" in filled
    assert filled.endswith("Lakeside Clinic")


def test_fill_fallbacks():
    snapshot = full_snapshot(
        patient=PatientInfo(first_name="Amina"),
        organization_name=None,
        appointments=[AppointmentInfo(appointment_date=date(2025, 3, 5), status="scheduled")],
        prescriptions=[PrescriptionInfo(medication_name="Lisinopril")],
        visits=[VisitInfo(visit_date=datetime(2025, 2, 24))],
    )
    body = (
        "{patientLastName}|{clinicName}|{appointmentTime}|{doctorName}|{medicationDosage}|"
        "{medicationInstructions}|{lastVisitReason}|{followUpDate}|{amountDue}"
    )
    
    assert fill_template(body, snapshot).split("|") == [
        "Patient",
        "Our Healthcare Team",
        "your scheduled time",
        "your healthcare provider",
        "as prescribed",
        "Follow your prescription instructions",
        "your health concern",
        "as needed",
        "your outstanding balance",
    ]


def test_fill_dates_and_lab_names():
    body = "{labTestDate}|{labTestNames}|{labResult}|{lastVisitDate}|{followUpDate}|{medicationInstructions}"
    
    assert fill_template(body, full_snapshot()).split("|") == [
        "March 1, 2025",
        "HbA1c, Lipid panel, Creatinine",
        "8.1%",
        "February 24, 2025",
        "March 6, 2025",
        "Twice daily",
    ]


def test_unknown_tokens_are_left_verbatim():
    snapshot = full_snapshot()
    assert fill_template("Hi {patientFirstName}, {notAToken} {}", snapshot) == "Hi Amina, {notAToken} {}"


def test_substitution_is_single_pass():
    patient = PatientInfo(first_name="{patientLastName}", last_name="Okafor")
    snapshot = PatientClinicalSnapshot(as_of=NOW, patient=patient)
    assert fill_template("{patientFirstName}", snapshot) == "{patientLastName}"


def test_suggestions_capped_in_rule_order():
    suggestions = get_suggested_templates(full_snapshot())
    
    assert [s.template.id for s in suggestions] == [
        "appointment-reminder",
        "abnormal-results",
        "prescription-refill",
    ]
    assert [s.reason for s in suggestions] == [
        "Appointment on Mar 5",
        "Lab results from Mar 1",
        "Active prescription: Metformin",
    ]
    for suggestion in suggestions:
        assert unfilled_tokens(suggestion.filled_content) == []


def test_normal_lab_uses_lab_results_template():
    lab = LabResultInfo(test_name="CBC", test_date=datetime(2025, 3, 2), status="normal")
    suggestions = get_suggested_templates(PatientClinicalSnapshot(as_of=NOW, lab_results=[lab]))
    
    assert [s.template.id for s in suggestions] == ["lab-results"]
    assert "Test(s) completed: CBC" in suggestions[0].filled_content


def test_follow_up_rule():
    due = PatientClinicalSnapshot(
        as_of=NOW,
        visits=[VisitInfo(visit_date=datetime(2025, 2, 20), diagnosis="Hypertension", follow_up_date="2025-03-06")],
    )
    overdue = PatientClinicalSnapshot(
        as_of=NOW,
        visits=[VisitInfo(visit_date=datetime(2025, 2, 10), follow_up_date="2025-02-28")],
    )
    distant = PatientClinicalSnapshot(
        as_of=NOW,
        visits=[VisitInfo(visit_date=datetime(2025, 2, 10), follow_up_date="2025-04-28")],
    )
    
    [suggestion] = get_suggested_templates(due)
    assert suggestion.template.id == "follow-up"
    assert suggestion.reason == "Follow-up due Mar 6"
    assert "regarding: Hypertension" in suggestion.filled_content
    
    assert get_suggested_templates(overdue)[0].reason == "Follow-up was due Feb 28"
    assert get_suggested_templates(distant) == []


def test_appointment_window_and_status():
    def suggested(appointment_date, status="scheduled"):
        snapshot = PatientClinicalSnapshot(
            as_of=NOW,
            appointments=[AppointmentInfo(appointment_date=appointment_date, status=status)],
        )
        return [s.template.id for s in get_suggested_templates(snapshot)]
    
    assert suggested(date(2025, 3, 10)) == ["appointment-reminder"]
    assert suggested(date(2025, 3, 4), status="pending") == ["appointment-reminder"]
    assert suggested(date(2025, 3, 11)) == []
    assert suggested(date(2025, 3, 3)) == []
    assert suggested(date(2025, 3, 5), status="completed") == []


def test_prescription_rule():
    def suggested(*prescriptions):
        snapshot = PatientClinicalSnapshot(as_of=NOW, prescriptions=list(prescriptions))
        return [s.reason for s in get_suggested_templates(snapshot)]
    
    assert suggested(PrescriptionInfo(medication_name="Amlodipine", status=None)) == ["Active prescription: Amlodipine"]
    assert suggested(
        PrescriptionInfo(medication_name="Amoxicillin", status="completed"),
        PrescriptionInfo(medication_name="Amlodipine", status="active"),
    ) == ["Active prescription: Amlodipine"]
    assert suggested(PrescriptionInfo(medication_name=None, status="active")) == []


def test_empty_snapshot_has_no_suggestions():
    assert get_suggested_templates(PatientClinicalSnapshot(as_of=NOW)) == []


def test_template_catalogue():
    assert len(MESSAGE_TEMPLATES) == 8
    assert [t.id for t in list_templates("lab_result")] == ["lab-results", "abnormal-results"]
    assert get_template("health-tips").suggest_when == ()
    assert get_template("missing") is None


def test_missing_last_name_uses_generic_phrase():
    assert fill_template("Dear Mr. {patientLastName},", PatientClinicalSnapshot(as_of=NOW)) == "Dear Mr. Patient,"


def test_default_context_skips_past_and_closed_appointments():
    snapshot = full_snapshot(appointments=[
        AppointmentInfo(appointment_date=date(2024, 11, 1), status="completed"),
        AppointmentInfo(appointment_date=date(2025, 2, 20), status="scheduled"),
        AppointmentInfo(appointment_date=date(2025, 3, 4), status="cancelled"),
        AppointmentInfo(appointment_date=date(2025, 3, 5), doctor_name="Dr. Mensah", status="scheduled"),
        AppointmentInfo(appointment_date=date(2025, 3, 20), status="pending"),
    ])
    
    assert fill_template("{appointmentDate} with {doctorName}", snapshot) == "Wednesday, March 5, 2025 with Dr. Mensah"


def test_default_context_without_open_appointment_falls_back():
    snapshot = full_snapshot(appointments=[
        AppointmentInfo(appointment_date=date(2024, 11, 1), doctor_name="Dr. Old", status="completed"),
    ])
    
    assert fill_template("{appointmentDate}|{doctorName}", snapshot) == "your upcoming appointment date|your healthcare provider"


def test_default_context_uses_first_active_prescription():
    snapshot = full_snapshot(prescriptions=[
        PrescriptionInfo(medication_name="Amoxicillin", dosage="500mg", status="discontinued"),
        PrescriptionInfo(medication_name=None, status="active"),
        PrescriptionInfo(medication_name="Metformin", dosage="850mg", status="active"),
    ])
    
    assert fill_template("{medicationName} ({medicationDosage})", snapshot) == "Metformin (850mg)"
    
    closed = full_snapshot(prescriptions=[PrescriptionInfo(medication_name="Amoxicillin", status="completed")])
    assert fill_template("{medicationName}", closed) == "your medication"
