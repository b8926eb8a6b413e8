"""
Visit recording session.

A `VisitRecorder` owns the state of one open recording view for one patient:
the form values, the list fields kept beside the form, the derived clinical
evaluation and the periodic autosave. Opening and closing the view map to
`open()` and `close()`.
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from app.config import settings
from app.core.logging import logger
from app.core.storage import KeyValueStore
from app.data.medication_suggestions import MedicationSuggestion, format_medication
from app.features.visits.clinical import VisitEvaluation, evaluate_visit
from app.features.visits.drafts import DraftLoadResult, clear_draft, load_draft, save_draft
from app.features.visits.schemas import DraftSnapshot, VisitDraft, VisitSubmission


class AutosaveScheduler:
    """Runs an async callback every `interval_seconds` between start() and stop()."""
    
    def __init__(self, callback: Callable[[], Awaitable[object]], interval_seconds: float):
        self.callback = callback
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
    
    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
    
    def start(self) -> None:
        """Start ticking; must be called from a running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
    
    async def stop(self) -> None:
        if not self._task:
            return
        
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
    
    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.callback()
            except Exception:
                logger.exception("Autosave tick failed")


class VisitRecorder:
    """State of one visit recording view."""
    
    def __init__(
        self,
        patient_id: str,
        store: KeyValueStore,
        autosave_interval_seconds: Optional[float] = None
    ):
        self.patient_id = patient_id
        self.store = store
        
        self.values = VisitDraft()
        self.additional_diagnoses: List[str] = []
        self.medication_list: List[str] = []
        self.evaluation = VisitEvaluation()
        
        self.last_saved: Optional[datetime] = None
        self.pending_draft: Optional[DraftSnapshot] = None
        
        interval = autosave_interval_seconds or settings.DRAFT_AUTOSAVE_INTERVAL_SECONDS
        self.scheduler = AutosaveScheduler(self.autosave_tick, interval)
    
    # ============== Lifecycle ==============
    
    async def open(self, now: Optional[datetime] = None) -> DraftLoadResult:
        """Load any stored draft and start autosaving."""
        result = await self.load_draft_on_open(now=now)
        self.scheduler.start()
        return result
    
    async def close(self) -> None:
        await self.scheduler.stop()
    
    async def load_draft_on_open(self, now: Optional[datetime] = None) -> DraftLoadResult:
        """
        Reset the session and look for a stored draft.
        
        A recent draft is kept in `pending_draft` for the user to accept; its
        diagnosis and medication lists are taken over immediately.
        """
        self.values = VisitDraft()
        self.additional_diagnoses = []
        self.medication_list = []
        self.evaluation = VisitEvaluation()
        self.pending_draft = None
        
        result = await load_draft(self.store, self.patient_id, now=now)
        
        if result.status == "restorable" and result.snapshot:
            self.pending_draft = result.snapshot
            self.additional_diagnoses = list(result.snapshot.additional_diagnoses)
            self.medication_list = list(result.snapshot.medication_list)
        
        return result
    
    def restore_draft(self) -> VisitEvaluation:
        """Apply the offered draft to the form."""
        if not self.pending_draft:
            return self.evaluation
        
        values = VisitDraft(**self.pending_draft.model_dump(include=set(VisitDraft.model_fields)))
        self.pending_draft = None
        return self.on_field_change(values)
    
    async def discard_draft(self) -> None:
        """Reject the offered draft and start from an empty form."""
        self.pending_draft = None
        self.values = VisitDraft()
        self.additional_diagnoses = []
        self.medication_list = []
        self.evaluation = VisitEvaluation()
        await self.clear_draft()
    
    # ============== Form changes ==============
    
    def on_field_change(self, values: VisitDraft) -> VisitEvaluation:
        """Take the current form values and recompute every derived field."""
        self.values = values
        self.evaluation = evaluate_visit(values)
        return self.evaluation
    
    def add_diagnosis(self, diagnosis: str) -> bool:
        """Add a secondary diagnosis; returns False if empty or already listed."""
        diagnosis = diagnosis.strip()
        if not diagnosis or diagnosis in self.additional_diagnoses:
            return False
        self.additional_diagnoses.append(diagnosis)
        return True
    
    def remove_diagnosis(self, diagnosis: str) -> None:
        if diagnosis in self.additional_diagnoses:
            self.additional_diagnoses.remove(diagnosis)
    
    def add_medication(self, medication: str) -> bool:
        """Add a medication to the list; returns False if empty or already listed."""
        medication = medication.strip()
        if not medication or medication in self.medication_list:
            return False
        self.medication_list.append(medication)
        return True
    
    def add_suggested_medication(self, suggestion: MedicationSuggestion) -> bool:
        return self.add_medication(format_medication(suggestion))
    
    def remove_medication(self, medication: str) -> None:
        if medication in self.medication_list:
            self.medication_list.remove(medication)
    
    def submission(self) -> VisitSubmission:
        """Form values plus list fields, ready for saving or submitting."""
        return VisitSubmission(
            **self.values.model_dump(),
            additional_diagnoses=list(self.additional_diagnoses),
            medication_list=list(self.medication_list),
        )
    
    # ============== Persistence ==============
    
    async def autosave_tick(self, now: Optional[datetime] = None) -> bool:
        """Save the current form if it has content; returns whether a write happened."""
        saved_at = await save_draft(self.store, self.patient_id, self.submission(), now=now)
        if saved_at:
            self.last_saved = saved_at
        return saved_at is not None
    
    async def clear_draft(self) -> None:
        """Drop the stored draft, e.g. after the visit was submitted."""
        await clear_draft(self.store, self.patient_id)
        self.last_saved = None
