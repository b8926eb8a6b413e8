# Vaccinations Feature - Service

from typing import List, Iterable
from datetime import date, timedelta
from bson import ObjectId
from app.features.vaccinations.models import Vaccination
from app.features.vaccinations.schemas import (
    VaccinationCreate,
    VaccinationUpdate,
    VaccinationResponse,
    VaccinationStatisticsResponse,
)
from app.features.patients.service import PatientService
from app.core.logging import logger
from app.shared.exceptions import NotFoundException


def filter_due_soon(
    vaccinations: Iterable[Vaccination],
    today: date,
    days_ahead: int = 30
) -> List[Vaccination]:
    """Vaccinations whose next dose falls between today and today + days_ahead, soonest first."""
    horizon = today + timedelta(days=days_ahead)
    due = [
        v for v in vaccinations
        if v.next_due_date is not None and today <= v.next_due_date <= horizon
    ]
    return sorted(due, key=lambda v: v.next_due_date)


def compute_statistics(
    vaccinations: Iterable[Vaccination],
    today: date,
    days_ahead: int = 30
) -> VaccinationStatisticsResponse:
    """
    Aggregate vaccination counters.
    
    A dose due today counts as both overdue and due soon.
    """
    records = list(vaccinations)
    horizon = today + timedelta(days=days_ahead)
    
    return VaccinationStatisticsResponse(
        total_vaccinations=len(records),
        patients_vaccinated=len({v.patient_id for v in records}),
        overdue=sum(1 for v in records if v.next_due_date is not None and v.next_due_date <= today),
        due_soon=sum(
            1 for v in records
            if v.next_due_date is not None and today <= v.next_due_date <= horizon
        ),
    )


class VaccinationService:
    """Service class for vaccination tracking."""
    
    @staticmethod
    def _to_response(vaccination: Vaccination) -> VaccinationResponse:
        return VaccinationResponse(
            id=str(vaccination.id),
            organization_id=vaccination.organization_id,
            patient_id=vaccination.patient_id,
            vaccine_name=vaccination.vaccine_name,
            date_administered=vaccination.date_administered,
            administered_by=vaccination.administered_by,
            batch_number=vaccination.batch_number,
            manufacturer=vaccination.manufacturer,
            next_due_date=vaccination.next_due_date,
            notes=vaccination.notes,
            created_at=vaccination.created_at,
            updated_at=vaccination.updated_at,
        )
    
    @staticmethod
    async def _get_for_patient(
        organization_id: str,
        patient_id: str,
        vaccination_id: str
    ) -> Vaccination:
        try:
            vaccination = await Vaccination.get(ObjectId(vaccination_id))
        except Exception:
            raise NotFoundException("Vaccination not found")
        
        if (
            not vaccination
            or vaccination.organization_id != organization_id
            or vaccination.patient_id != patient_id
        ):
            raise NotFoundException("Vaccination not found")
        
        return vaccination
    
    @staticmethod
    async def create_vaccination(
        organization_id: str,
        patient_id: str,
        data: VaccinationCreate
    ) -> VaccinationResponse:
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        vaccination = Vaccination(
            organization_id=organization_id,
            patient_id=patient_id,
            **data.model_dump(),
        )
        await vaccination.insert()
        
        logger.info(f"Recorded {vaccination.vaccine_name} for patient {patient_id}")
        return VaccinationService._to_response(vaccination)
    
    @staticmethod
    async def list_vaccinations(organization_id: str, patient_id: str) -> List[VaccinationResponse]:
        """Vaccinations for a patient, most recently administered first."""
        await PatientService.get_patient_by_id(patient_id, organization_id)
        
        vaccinations = await Vaccination.find(
            Vaccination.organization_id == organization_id,
            Vaccination.patient_id == patient_id
        ).sort([("date_administered", -1)]).to_list()
        
        return [VaccinationService._to_response(v) for v in vaccinations]
    
    @staticmethod
    async def update_vaccination(
        organization_id: str,
        patient_id: str,
        vaccination_id: str,
        data: VaccinationUpdate
    ) -> VaccinationResponse:
        vaccination = await VaccinationService._get_for_patient(
            organization_id, patient_id, vaccination_id
        )
        
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(vaccination, field, value)
        
        vaccination.update_timestamp()
        await vaccination.save()
        
        logger.info(f"Updated vaccination {vaccination_id}")
        return VaccinationService._to_response(vaccination)
    
    @staticmethod
    async def delete_vaccination(
        organization_id: str,
        patient_id: str,
        vaccination_id: str
    ) -> None:
        vaccination = await VaccinationService._get_for_patient(
            organization_id, patient_id, vaccination_id
        )
        await vaccination.delete()
        
        logger.info(f"Deleted vaccination {vaccination_id} for patient {patient_id}")
    
    @staticmethod
    async def get_due_soon(
        organization_id: str,
        days_ahead: int = 30
    ) -> List[VaccinationResponse]:
        today = date.today()
        vaccinations = await Vaccination.find(
            Vaccination.organization_id == organization_id,
            Vaccination.next_due_date != None
        ).to_list()
        
        due = filter_due_soon(vaccinations, today, days_ahead)
        return [VaccinationService._to_response(v) for v in due]
    
    @staticmethod
    async def get_statistics(organization_id: str) -> VaccinationStatisticsResponse:
        vaccinations = await Vaccination.find(
            Vaccination.organization_id == organization_id
        ).to_list()
        
        return compute_statistics(vaccinations, date.today())
