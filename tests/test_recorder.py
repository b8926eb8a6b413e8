"""Test the visit recording session and its autosave scheduler."""

import asyncio
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.storage import InMemoryKeyValueStore, draft_key
from app.data.medication_suggestions import MEDICATION_SUGGESTIONS
from app.features.visits.clinical import TACHYCARDIA
from app.features.visits.drafts import save_draft
from app.features.visits import AutosaveScheduler, VisitRecorder
from app.features.visits.schemas import VisitDraft, VisitSubmission


NOW = datetime(2025, 3, 3, 9, 0, 0)


def test_field_change_recomputes_everything():
    recorder = VisitRecorder("P00001", InMemoryKeyValueStore())
    
    evaluation = recorder.on_field_change(VisitDraft(
        heart_rate="110", weight="70", height="170", diagnosis="Upper respiratory infection"
    ))
    assert evaluation.bmi == 24.2
    assert evaluation.alerts == [TACHYCARDIA]
    assert evaluation.suggested_medications
    
    evaluation = recorder.on_field_change(VisitDraft(heart_rate="80"))
    assert evaluation.bmi is None
    assert evaluation.alerts == []
    assert evaluation.suggested_medications == []
    assert evaluation.treatment_instructions is None


def test_list_fields_are_idempotent():
    recorder = VisitRecorder("P00001", InMemoryKeyValueStore())
    amoxicillin = MEDICATION_SUGGESTIONS[0]
    
    assert recorder.add_suggested_medication(amoxicillin)
    assert not recorder.add_suggested_medication(amoxicillin)
    assert recorder.add_diagnosis("Asthma")
    assert not recorder.add_diagnosis(" Asthma ")
    assert not recorder.add_diagnosis("")
    
    assert len(recorder.medication_list) == 1
    assert recorder.additional_diagnoses == ["Asthma"]
    
    recorder.remove_diagnosis("Asthma")
    recorder.remove_medication("not listed")
    assert recorder.additional_diagnoses == []
    assert len(recorder.medication_list) == 1


def test_autosave_tick_records_last_saved():
    store = InMemoryKeyValueStore()
    recorder = VisitRecorder("P00001", store)
    
    assert not asyncio.run(recorder.autosave_tick(now=NOW))
    assert recorder.last_saved is None
    
    recorder.on_field_change(VisitDraft(chief_complaint="Headache"))
    assert asyncio.run(recorder.autosave_tick(now=NOW))
    assert recorder.last_saved == NOW
    assert draft_key("P00001") in store.keys()
    
    asyncio.run(recorder.clear_draft())
    assert store.keys() == []
    assert recorder.last_saved is None


def test_restore_offered_draft():
    store = InMemoryKeyValueStore()
    saved = VisitSubmission(
        chief_complaint="Fever",
        temperature="39.2",
        diagnosis="Malaria",
        additional_diagnoses=["Anaemia"],
        medication_list=["Artemether/Lumefantrine"],
    )
    asyncio.run(save_draft(store, "P00001", saved, now=NOW - timedelta(hours=2)))
    
    recorder = VisitRecorder("P00001", store)
    result = asyncio.run(recorder.load_draft_on_open(now=NOW))
    
    assert result.status == "restorable"
    assert recorder.pending_draft is not None
    assert recorder.additional_diagnoses == ["Anaemia"]
    assert recorder.medication_list == ["Artemether/Lumefantrine"]
    # The form itself stays empty until the draft is accepted
    assert recorder.values.chief_complaint == ""
    
    evaluation = recorder.restore_draft()
    assert recorder.pending_draft is None
    assert recorder.values.chief_complaint == "Fever"
    assert "Artemether/Lumefantrine" in [m.name for m in evaluation.suggested_medications]
    assert recorder.submission().model_dump() == saved.model_dump()


def test_discard_offered_draft():
    store = InMemoryKeyValueStore()
    asyncio.run(save_draft(store, "P00001", VisitSubmission(diagnosis="Malaria"), now=NOW))
    
    recorder = VisitRecorder("P00001", store)
    asyncio.run(recorder.load_draft_on_open(now=NOW))
    asyncio.run(recorder.discard_draft())
    
    assert recorder.pending_draft is None
    assert store.keys() == []


def test_expired_draft_on_open():
    store = InMemoryKeyValueStore()
    asyncio.run(save_draft(store, "P00001", VisitSubmission(diagnosis="Malaria"), now=NOW - timedelta(days=2)))
    
    recorder = VisitRecorder("P00001", store)
    result = asyncio.run(recorder.load_draft_on_open(now=NOW))
    
    assert result.status == "expired"
    assert recorder.pending_draft is None
    assert store.keys() == []


def test_scheduler_start_stop():
    calls = []
    
    async def tick():
        calls.append(1)
    
    async def scenario():
        scheduler = AutosaveScheduler(tick, interval_seconds=0.01)
        scheduler.start()
        scheduler.start()
        assert scheduler.running
        
        await asyncio.sleep(0.1)
        await scheduler.stop()
        assert not scheduler.running
        
        stopped_at = len(calls)
        await asyncio.sleep(0.05)
        return stopped_at
    
    stopped_at = asyncio.run(scenario())
    assert stopped_at >= 1
    assert len(calls) == stopped_at


def test_scheduler_survives_failing_tick():
    calls = []
    
    async def tick():
        calls.append(1)
        raise RuntimeError("boom")
    
    async def scenario():
        scheduler = AutosaveScheduler(tick, interval_seconds=0.01)
        scheduler.start()
        await asyncio.sleep(0.1)
        assert scheduler.running
        await scheduler.stop()
    
    asyncio.run(scenario())
    assert len(calls) >= 2


def test_open_and_close_recorder_autosaves():
    store = InMemoryKeyValueStore()
    
    async def scenario():
        recorder = VisitRecorder("P00001", store, autosave_interval_seconds=0.01)
        await recorder.open()
        assert recorder.scheduler.running
        
        recorder.on_field_change(VisitDraft(treatment_plan="Rest"))
        await asyncio.sleep(0.1)
        await recorder.close()
        return recorder
    
    recorder = asyncio.run(scenario())
    assert not recorder.scheduler.running
    assert recorder.last_saved is not None
    assert draft_key("P00001") in store.keys()
