"""
Best-effort persistence of unsubmitted visit drafts.

One draft slot per patient lives in an injected key/value store. Storage
failures are logged and swallowed: the form in memory stays the source of
truth and callers never see a persistence error.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from pydantic import ValidationError

from app.config import settings
from app.core.logging import logger
from app.core.storage import KeyValueStore, draft_key
from app.features.visits.schemas import DraftSnapshot, VisitDraft, VisitSubmission


DraftStatus = Literal["restorable", "expired", "none"]


@dataclass
class DraftLoadResult:
    status: DraftStatus
    snapshot: Optional[DraftSnapshot] = None


def has_meaningful_content(values: VisitDraft) -> bool:
    """A draft is worth saving once any of the required narrative fields is filled."""
    return bool(values.chief_complaint or values.diagnosis or values.treatment_plan)


def _as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


async def save_draft(
    store: KeyValueStore,
    patient_id: str,
    submission: VisitSubmission,
    now: Optional[datetime] = None
) -> Optional[datetime]:
    """
    Write the draft for a patient.
    
    Returns the saved timestamp, or None when the draft was empty or the
    write failed.
    """
    if not has_meaningful_content(submission):
        logger.debug(f"Skipping empty draft for patient {patient_id}")
        return None
    
    timestamp = now or datetime.utcnow()
    snapshot = DraftSnapshot(**submission.model_dump(), timestamp=timestamp)
    
    try:
        await store.set(draft_key(patient_id), snapshot.model_dump_json())
    except Exception as e:
        logger.error(f"Failed to save draft for patient {patient_id}: {e}")
        return None
    
    logger.debug(f"Saved draft for patient {patient_id} at {timestamp.isoformat()}")
    return timestamp


async def clear_draft(store: KeyValueStore, patient_id: str) -> None:
    """Remove the stored draft for a patient."""
    try:
        await store.remove(draft_key(patient_id))
    except Exception as e:
        logger.error(f"Failed to clear draft for patient {patient_id}: {e}")


async def load_draft(
    store: KeyValueStore,
    patient_id: str,
    now: Optional[datetime] = None,
    max_age_hours: Optional[float] = None
) -> DraftLoadResult:
    """
    Read the stored draft for a patient when the recording view opens.
    
    Drafts younger than `max_age_hours` are returned for the user to restore;
    older ones are deleted.
    """
    max_age = timedelta(hours=max_age_hours if max_age_hours is not None else settings.DRAFT_MAX_AGE_HOURS)
    
    try:
        raw = await store.get(draft_key(patient_id))
    except Exception as e:
        logger.error(f"Failed to load draft for patient {patient_id}: {e}")
        return DraftLoadResult(status="none")
    
    if not raw:
        return DraftLoadResult(status="none")
    
    try:
        snapshot = DraftSnapshot.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable draft for patient {patient_id}: {e}")
        return DraftLoadResult(status="none")
    
    age = _as_naive_utc(now or datetime.utcnow()) - _as_naive_utc(snapshot.timestamp)
    
    if age < max_age:
        logger.info(f"Found draft for patient {patient_id} from {snapshot.timestamp.isoformat()}")
        return DraftLoadResult(status="restorable", snapshot=snapshot)
    
    logger.info(f"Discarding draft for patient {patient_id} older than {max_age}")
    await clear_draft(store, patient_id)
    return DraftLoadResult(status="expired")
