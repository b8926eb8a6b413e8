"""Test vaccination due-soon filtering and statistics."""

import sys
from datetime import date
from pathlib import Path
from types import SimpleNamespace

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.features.vaccinations.service import compute_statistics, filter_due_soon


TODAY = date(2025, 3, 3)


def dose(patient_id, next_due_date, vaccine_name="Hepatitis B"):
    return SimpleNamespace(patient_id=patient_id, next_due_date=next_due_date, vaccine_name=vaccine_name)


RECORDS = [
    dose("P00001", date(2025, 3, 20)),
    dose("P00001", None, "BCG"),
    dose("P00002", TODAY),
    dose("P00002", date(2025, 2, 1)),
    dose("P00003", date(2025, 4, 2)),
    dose("P00004", date(2025, 4, 3)),
]


def test_due_soon_window_and_order():
    due = filter_due_soon(RECORDS, TODAY)
    assert [v.next_due_date for v in due] == [TODAY, date(2025, 3, 20), date(2025, 4, 2)]
    
    assert filter_due_soon(RECORDS, TODAY, days_ahead=0) == [RECORDS[2]]


def test_statistics():
    stats = compute_statistics(RECORDS, TODAY)
    
    assert stats.total_vaccinations == 6
    assert stats.patients_vaccinated == 4
    # Due today counts as both overdue and due soon
    assert stats.overdue == 2
    assert stats.due_soon == 3


def test_statistics_empty():
    stats = compute_statistics([], TODAY)
    assert (stats.total_vaccinations, stats.patients_vaccinated, stats.overdue, stats.due_soon) == (0, 0, 0, 0)
