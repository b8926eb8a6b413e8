# Messages Feature - Patient Snapshot

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field
from app.core.logging import logger
from app.features.appointments.service import AppointmentService
from app.features.lab_results.service import LabResultService
from app.features.organizations.service import OrganizationService
from app.features.patients.service import PatientService
from app.features.prescriptions.service import PrescriptionService
from app.features.visits.service import VisitService


class PatientInfo(BaseModel):
    patient_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    allergies: List[str] = []
    medical_history: Optional[str] = None


class AppointmentInfo(BaseModel):
    appointment_date: date
    appointment_time: Optional[str] = None
    doctor_name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None


class PrescriptionInfo(BaseModel):
    medication_name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    instructions: Optional[str] = None
    status: Optional[str] = None


class LabResultInfo(BaseModel):
    test_name: str
    test_date: datetime
    result: Optional[str] = None
    status: Optional[str] = None


class VisitInfo(BaseModel):
    visit_date: datetime
    chief_complaint: Optional[str] = None
    diagnosis: Optional[str] = None
    follow_up_date: Optional[str] = None


class PatientClinicalSnapshot(BaseModel):
    """
    Point-in-time view of a patient's clinical data.
    
    Lists keep the order the message engine relies on: appointments soonest
    first, everything else most recent first.
    """
    as_of: datetime = Field(default_factory=datetime.utcnow)
    patient: Optional[PatientInfo] = None
    organization_name: Optional[str] = None
    appointments: List[AppointmentInfo] = []
    prescriptions: List[PrescriptionInfo] = []
    lab_results: List[LabResultInfo] = []
    visits: List[VisitInfo] = []


async def build_patient_snapshot(
    patient_id: str,
    organization_id: str,
    now: Optional[datetime] = None
) -> PatientClinicalSnapshot:
    """
    Assemble a snapshot from the stored records of a patient.
    
    Raises:
        NotFoundException: If the patient is not in the organization
    """
    patient = await PatientService.get_patient_by_id(patient_id, organization_id)
    organization = await OrganizationService.get_organization(organization_id)
    
    appointments = await AppointmentService.list_documents(organization_id, patient_id)
    prescriptions = await PrescriptionService.list_documents(organization_id, patient_id)
    lab_results = await LabResultService.list_documents(organization_id, patient_id)
    visits = await VisitService.list_documents(organization_id, patient_id)
    
    logger.debug(
        f"Snapshot for patient {patient_id}: {len(appointments)} appointments, "
        f"{len(prescriptions)} prescriptions, {len(lab_results)} lab results, {len(visits)} visits"
    )
    
    return PatientClinicalSnapshot(
        as_of=now or datetime.utcnow(),
        patient=PatientInfo(
            patient_id=patient.patient_id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            date_of_birth=patient.date_of_birth,
            gender=patient.gender,
            phone=patient.phone,
            email=patient.email,
            allergies=patient.allergies,
            medical_history=patient.medical_history,
        ),
        organization_name=organization.name if organization else None,
        appointments=[
            AppointmentInfo(
                appointment_date=a.appointment_date,
                appointment_time=a.appointment_time,
                doctor_name=a.doctor_name,
                type=a.type,
                status=a.status,
            )
            for a in appointments
        ],
        prescriptions=[
            PrescriptionInfo(
                medication_name=p.medication_name,
                dosage=p.dosage,
                frequency=p.frequency,
                instructions=p.instructions,
                status=p.status,
            )
            for p in prescriptions
        ],
        lab_results=[
            LabResultInfo(
                test_name=l.test_name,
                test_date=l.test_date,
                result=l.result,
                status=l.status,
            )
            for l in lab_results
        ],
        visits=[
            VisitInfo(
                visit_date=v.visit_date,
                chief_complaint=v.chief_complaint,
                diagnosis=v.diagnosis,
                follow_up_date=v.follow_up_date,
            )
            for v in visits
        ],
    )
