"""
Template filling and context-aware template suggestions.

`fill_template` substitutes every known `{token}` in a single pass through a
token -> resolver table. Each resolver falls back to a generic phrase when the
data it needs is missing, so a filled message never shows a known
placeholder. Unknown tokens are left as written.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Union

from app.config import settings
from app.core.logging import logger
from app.features.messages.snapshot import (
    AppointmentInfo,
    LabResultInfo,
    PatientClinicalSnapshot,
    PrescriptionInfo,
    VisitInfo,
)
from app.features.messages.templates import MessageTemplate, get_template


_TOKEN = re.compile(r"\{(\w+)\}")


@dataclass
class FillContext:
    """The specific records a message is about."""
    appointment: Optional[AppointmentInfo] = None
    prescription: Optional[PrescriptionInfo] = None
    lab_result: Optional[LabResultInfo] = None
    all_lab_results: List[LabResultInfo] = field(default_factory=list)
    visit: Optional[VisitInfo] = None

    @classmethod
    def from_snapshot(cls, snapshot: PatientClinicalSnapshot) -> "FillContext":
        """
        Most relevant record of each kind: the nearest open appointment from
        today on, the first active prescription, and the latest lab result and
        visit.
        """
        return cls(
            appointment=_next_open_appointment(snapshot),
            prescription=_active_prescription(snapshot),
            lab_result=snapshot.lab_results[0] if snapshot.lab_results else None,
            all_lab_results=list(snapshot.lab_results),
            visit=snapshot.visits[0] if snapshot.visits else None,
        )


@dataclass
class RankedSuggestion:
    template: MessageTemplate
    reason: str
    filled_content: str


# ==================== Formatting ====================

def format_long_date(value: Union[date, datetime]) -> str:
    """March 3, 2025"""
    return f"{value:%B} {value.day}, {value.year}"


def format_weekday_date(value: Union[date, datetime]) -> str:
    """Monday, March 3, 2025"""
    return f"{value:%A, %B} {value.day}, {value.year}"


def format_short_date(value: Union[date, datetime]) -> str:
    """Mar 3"""
    return f"{value:%b} {value.day}"


def parse_follow_up_date(value: Optional[str]) -> Optional[datetime]:
    """Follow-up dates are stored as entered; anything not ISO formatted is ignored."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def _start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def _naive(value: datetime) -> datetime:
    return value.replace(tzinfo=None) if value.tzinfo else value


# ==================== Token Resolvers ====================

Resolver = Callable[[PatientClinicalSnapshot, FillContext], str]


def _patient_name(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    patient = snapshot.patient
    if not patient:
        return "Valued Patient"
    name = " ".join(part for part in (patient.first_name, patient.last_name) if part)
    return name or "Valued Patient"


def _patient_first_name(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if snapshot.patient and snapshot.patient.first_name:
        return snapshot.patient.first_name
    return "Valued Patient"


def _patient_last_name(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if snapshot.patient and snapshot.patient.last_name:
        return snapshot.patient.last_name
    return "Patient"


def _appointment_date(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if not ctx.appointment:
        return "your upcoming appointment date"
    return format_weekday_date(ctx.appointment.appointment_date)


def _medication_instructions(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    prescription = ctx.prescription
    if prescription and (prescription.instructions or prescription.frequency):
        return prescription.instructions or prescription.frequency
    return "Follow your prescription instructions"


def _medication_name(fallback: str) -> Resolver:
    def resolve(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
        if ctx.prescription and ctx.prescription.medication_name:
            return ctx.prescription.medication_name
        return fallback
    return resolve


def _lab_test_date(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if not ctx.lab_result:
        return "your recent test date"
    return format_long_date(ctx.lab_result.test_date)


def _lab_test_names(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if ctx.all_lab_results:
        return ", ".join(lab.test_name for lab in ctx.all_lab_results[:3])
    if ctx.lab_result:
        return ctx.lab_result.test_name
    return "your recent tests"


def _last_visit_date(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if not ctx.visit:
        return "your last visit"
    return format_long_date(ctx.visit.visit_date)


def _last_visit_reason(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if ctx.visit and (ctx.visit.chief_complaint or ctx.visit.diagnosis):
        return ctx.visit.chief_complaint or ctx.visit.diagnosis
    return "your health concern"


def _follow_up_date(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
    if not ctx.visit or not ctx.visit.follow_up_date:
        return "as needed"
    parsed = parse_follow_up_date(ctx.visit.follow_up_date)
    return format_long_date(parsed) if parsed else ctx.visit.follow_up_date


def _attribute(record: str, name: str, fallback: str) -> Resolver:
    """Resolver for a plain attribute of one context record."""
    def resolve(snapshot: PatientClinicalSnapshot, ctx: FillContext) -> str:
        source = getattr(ctx, record)
        value = getattr(source, name, None) if source else None
        return value or fallback
    return resolve


TOKEN_RESOLVERS: Dict[str, Resolver] = {
    "patientName": _patient_name,
    "patientFirstName": _patient_first_name,
    "patientLastName": _patient_last_name,
    "clinicName": lambda snapshot, ctx: snapshot.organization_name or settings.DEFAULT_ORGANIZATION_NAME,
    "appointmentDate": _appointment_date,
    "appointmentTime": _attribute("appointment", "appointment_time", "your scheduled time"),
    "doctorName": _attribute("appointment", "doctor_name", "your healthcare provider"),
    "appointmentType": _attribute("appointment", "type", "appointment"),
    "medicationName": _medication_name("your medication"),
    "medicationDosage": _attribute("prescription", "dosage", "as prescribed"),
    "medicationInstructions": _medication_instructions,
    "previousMedication": _medication_name("your previous medication"),
    "newMedication": _medication_name("your new medication"),
    "labTestDate": _lab_test_date,
    "labTestNames": _lab_test_names,
    "labResult": _attribute("lab_result", "result", "See portal for details"),
    "lastVisitDate": _last_visit_date,
    "lastVisitReason": _last_visit_reason,
    "followUpDate": _follow_up_date,
    "amountDue": lambda snapshot, ctx: "your outstanding balance",
}


def fill_template(
    body: str,
    snapshot: PatientClinicalSnapshot,
    context: Optional[FillContext] = None
) -> str:
    """
    Replace every known placeholder in a template body.

    Without an explicit context the records are picked by
    `FillContext.from_snapshot`.
    """
    ctx = context if context is not None else FillContext.from_snapshot(snapshot)

    def substitute(match: "re.Match") -> str:
        resolver = TOKEN_RESOLVERS.get(match.group(1))
        if resolver is None:
            return match.group(0)
        return resolver(snapshot, ctx)

    return _TOKEN.sub(substitute, body)


# ==================== Suggestions ====================

OPEN_APPOINTMENT_STATUSES = ("scheduled", "pending")


def _next_open_appointment(snapshot: PatientClinicalSnapshot) -> Optional[AppointmentInfo]:
    today = _naive(snapshot.as_of).date()
    for appointment in snapshot.appointments:
        if appointment.status in OPEN_APPOINTMENT_STATUSES and appointment.appointment_date >= today:
            return appointment
    return None


def _upcoming_appointment(snapshot: PatientClinicalSnapshot, window: timedelta) -> Optional[AppointmentInfo]:
    now = _naive(snapshot.as_of)
    for appointment in snapshot.appointments:
        if appointment.status not in OPEN_APPOINTMENT_STATUSES:
            continue
        starts = _start_of_day(appointment.appointment_date)
        if now < starts < now + window:
            return appointment
    return None


def _recent_lab_result(snapshot: PatientClinicalSnapshot, window: timedelta) -> Optional[LabResultInfo]:
    now = _naive(snapshot.as_of)
    for lab in snapshot.lab_results:
        if now - _naive(lab.test_date) <= window:
            return lab
    return None


def _active_prescription(snapshot: PatientClinicalSnapshot) -> Optional[PrescriptionInfo]:
    for prescription in snapshot.prescriptions:
        if prescription.status in ("active", None) and prescription.medication_name:
            return prescription
    return None


def get_suggested_templates(snapshot: PatientClinicalSnapshot) -> List[RankedSuggestion]:
    """
    Templates relevant to the patient's current situation, already filled.

    Rules run in a fixed order (upcoming appointment, recent lab result,
    active prescription, follow-up due) and the earliest ones win when more
    than the cap would qualify.
    """
    window = timedelta(days=settings.TEMPLATE_SUGGESTION_WINDOW_DAYS)
    suggestions: List[RankedSuggestion] = []

    def add(template_id: str, reason: str, context: FillContext) -> None:
        template = get_template(template_id)
        suggestions.append(RankedSuggestion(
            template=template,
            reason=reason,
            filled_content=fill_template(template.content, snapshot, context),
        ))

    appointment = _upcoming_appointment(snapshot, window)
    if appointment:
        add(
            "appointment-reminder",
            f"Appointment on {format_short_date(appointment.appointment_date)}",
            FillContext(appointment=appointment),
        )

    lab = _recent_lab_result(snapshot, window)
    if lab:
        add(
            "abnormal-results" if lab.status == "abnormal" else "lab-results",
            f"Lab results from {format_short_date(lab.test_date)}",
            FillContext(lab_result=lab, all_lab_results=list(snapshot.lab_results)),
        )

    prescription = _active_prescription(snapshot)
    if prescription:
        add(
            "prescription-refill",
            f"Active prescription: {prescription.medication_name}",
            FillContext(prescription=prescription),
        )

    last_visit = snapshot.visits[0] if snapshot.visits else None
    follow_up = parse_follow_up_date(last_visit.follow_up_date) if last_visit else None
    if follow_up:
        delta = _naive(follow_up) - _naive(snapshot.as_of)
        if -window <= delta <= window:
            status = "was due" if delta < timedelta(0) else "due"
            add(
                "follow-up",
                f"Follow-up {status} {format_short_date(follow_up)}",
                FillContext(visit=last_visit),
            )

    if len(suggestions) > settings.MAX_TEMPLATE_SUGGESTIONS:
        logger.debug(f"Dropping {len(suggestions) - settings.MAX_TEMPLATE_SUGGESTIONS} lower-priority template suggestions")

    return suggestions[:settings.MAX_TEMPLATE_SUGGESTIONS]
