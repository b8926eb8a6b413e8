"""Test draft autosave gating, age cutoff and round-trip."""

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.storage import InMemoryKeyValueStore, draft_key, has_seen, mark_seen, seen_flag_key
from app.features.visits.drafts import clear_draft, has_meaningful_content, load_draft, save_draft
from app.features.visits.schemas import VisitSubmission


SAVED_AT = datetime(2025, 3, 3, 9, 0, 0)


class FailingStore:
    """Store whose every operation fails."""
    
    async def get(self, key):
        raise RuntimeError("storage unavailable")
    
    async def set(self, key, value):
        raise RuntimeError("storage unavailable")
    
    async def remove(self, key):
        raise RuntimeError("storage unavailable")


def full_submission() -> VisitSubmission:
    return VisitSubmission(
        visit_type="follow_up",
        chief_complaint="Cough for 5 days",
        history_of_present_illness="Dry cough, worse at night",
        blood_pressure="128/84",
        heart_rate="88",
        temperature="37.9",
        weight="70",
        height="170",
        respiratory_rate="18",
        oxygen_saturation="97",
        general_appearance="Alert, mildly unwell",
        respiratory_system="Scattered wheeze",
        diagnosis="Upper respiratory infection",
        treatment_plan="Symptomatic care",
        patient_instructions="Drink plenty of fluids",
        follow_up_date="2025-03-10",
        additional_diagnoses=["Mild asthma", "Allergic rhinitis"],
        medication_list=["Paracetamol 500mg - Every 6 hours as needed for 3 days (Oral)"],
    )


def test_autosave_gating():
    store = InMemoryKeyValueStore()
    
    empty = VisitSubmission(history_of_present_illness="notes only", heart_rate="80")
    assert not has_meaningful_content(empty)
    assert asyncio.run(save_draft(store, "P00001", empty, now=SAVED_AT)) is None
    assert store.keys() == []
    
    for field in ("chief_complaint", "diagnosis", "treatment_plan"):
        store = InMemoryKeyValueStore()
        saved = asyncio.run(save_draft(store, "P00001", VisitSubmission(**{field: "x"}), now=SAVED_AT))
        assert saved == SAVED_AT, field
        assert store.keys() == [draft_key("P00001")]


def test_round_trip_reproduces_every_field():
    store = InMemoryKeyValueStore()
    submission = full_submission()
    
    asyncio.run(save_draft(store, "P00001", submission, now=SAVED_AT))
    result = asyncio.run(load_draft(store, "P00001", now=SAVED_AT))
    
    assert result.status == "restorable"
    restored = result.snapshot.model_dump()
    assert restored.pop("timestamp") == SAVED_AT
    assert restored == submission.model_dump()


def test_draft_age_cutoff():
    store = InMemoryKeyValueStore()
    asyncio.run(save_draft(store, "P00001", full_submission(), now=SAVED_AT))
    
    fresh = asyncio.run(load_draft(store, "P00001", now=SAVED_AT + timedelta(hours=23, minutes=59)))
    assert fresh.status == "restorable"
    
    stale = asyncio.run(load_draft(store, "P00001", now=SAVED_AT + timedelta(hours=24, minutes=1)))
    assert stale.status == "expired"
    assert stale.snapshot is None
    assert store.keys() == []
    
    assert asyncio.run(load_draft(store, "P00001", now=SAVED_AT)).status == "none"


def test_aware_and_naive_times_compare():
    store = InMemoryKeyValueStore()
    asyncio.run(save_draft(store, "P00001", full_submission(), now=SAVED_AT))
    
    aware_now = (SAVED_AT + timedelta(hours=1)).replace(tzinfo=timezone.utc)
    assert asyncio.run(load_draft(store, "P00001", now=aware_now)).status == "restorable"


def test_drafts_are_per_patient():
    store = InMemoryKeyValueStore()
    asyncio.run(save_draft(store, "P00001", full_submission(), now=SAVED_AT))
    
    assert asyncio.run(load_draft(store, "P00002", now=SAVED_AT)).status == "none"
    
    asyncio.run(clear_draft(store, "P00002"))
    assert asyncio.run(load_draft(store, "P00001", now=SAVED_AT)).status == "restorable"


def test_unreadable_draft_is_ignored():
    store = InMemoryKeyValueStore({draft_key("P00001"): "{not json"})
    assert asyncio.run(load_draft(store, "P00001", now=SAVED_AT)).status == "none"


def test_storage_failures_are_swallowed():
    store = FailingStore()
    
    assert asyncio.run(save_draft(store, "P00001", full_submission(), now=SAVED_AT)) is None
    assert asyncio.run(load_draft(store, "P00001", now=SAVED_AT)).status == "none"
    asyncio.run(clear_draft(store, "P00001"))


def test_seen_flags():
    store = InMemoryKeyValueStore()
    
    assert not asyncio.run(has_seen(store, "draft-restored-toast"))
    asyncio.run(mark_seen(store, "draft-restored-toast"))
    assert asyncio.run(has_seen(store, "draft-restored-toast"))
    assert store.keys() == [seen_flag_key("draft-restored-toast")]
