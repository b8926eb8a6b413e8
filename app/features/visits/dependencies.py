# Visits Feature - Dependencies

from fastapi import Depends
from app.core.storage import KeyValueStore, MongoKeyValueStore
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User
from app.features.patients.models import Patient
from app.features.patients.service import PatientService


async def get_draft_store(
    current_user: User = Depends(get_current_user)
) -> KeyValueStore:
    """Draft store shared by everyone in the user's organization."""
    return MongoKeyValueStore(namespace=f"org:{require_organization(current_user)}")


async def get_visit_patient(
    patient_id: str,
    current_user: User = Depends(get_current_user)
) -> Patient:
    """
    Patient in the path, scoped to the user's organization.
    
    Raises:
        NotFoundException: If the patient is not in the organization
    """
    return await PatientService.get_patient_by_id(patient_id, require_organization(current_user))
