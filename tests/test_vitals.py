"""Test BMI calculation and vital-sign alerts."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.features.visits.clinical import (
    BRADYCARDIA,
    ELEVATED_BP,
    FEVER,
    HIGH_RESPIRATORY_RATE,
    LOW_BP,
    LOW_OXYGEN,
    LOW_RESPIRATORY_RATE,
    LOW_TEMPERATURE,
    TACHYCARDIA,
    calculate_bmi,
    evaluate_visit,
    evaluate_vital_signs,
    parse_blood_pressure,
    parse_float,
    parse_int,
)
from app.features.visits.schemas import VisitDraft


def test_bmi():
    """70kg at 170cm rounds to 24.2; missing or zero inputs give no BMI."""
    assert calculate_bmi("70", "170") == 24.2
    assert calculate_bmi("70", "0") is None
    assert calculate_bmi("", "170") is None
    assert calculate_bmi("seventy", "170") is None
    assert calculate_bmi("-70", "170") is None


def test_parsing_leading_numbers():
    assert parse_int("72 bpm") == 72
    assert parse_int("98.6") == 98
    assert parse_int("abc") is None
    assert parse_float("37.5C") == 37.5
    assert parse_float("") is None
    assert parse_blood_pressure("BP 120/80") == (120, 80)
    assert parse_blood_pressure("120") is None


def test_heart_rate_boundaries():
    cases = [
        ("100", []),
        ("101", [TACHYCARDIA]),
        ("59", [BRADYCARDIA]),
        ("60", []),
    ]
    
    for heart_rate, expected in cases:
        assert evaluate_vital_signs(VisitDraft(heart_rate=heart_rate)) == expected, heart_rate


def test_blood_pressure_single_alert():
    """Elevated wins when systolic and diastolic disagree."""
    assert evaluate_vital_signs(VisitDraft(blood_pressure="150/95")) == [ELEVATED_BP]
    assert evaluate_vital_signs(VisitDraft(blood_pressure="85/55")) == [LOW_BP]
    assert evaluate_vital_signs(VisitDraft(blood_pressure="150/55")) == [ELEVATED_BP]
    assert evaluate_vital_signs(VisitDraft(blood_pressure="120/80")) == []
    assert evaluate_vital_signs(VisitDraft(blood_pressure="140/90")) == []


def test_other_thresholds():
    assert evaluate_vital_signs(VisitDraft(temperature="38.1")) == [FEVER]
    assert evaluate_vital_signs(VisitDraft(temperature="38.0")) == []
    assert evaluate_vital_signs(VisitDraft(temperature="35.9")) == [LOW_TEMPERATURE]
    assert evaluate_vital_signs(VisitDraft(oxygen_saturation="94")) == [LOW_OXYGEN]
    assert evaluate_vital_signs(VisitDraft(oxygen_saturation="95")) == []
    assert evaluate_vital_signs(VisitDraft(respiratory_rate="21")) == [HIGH_RESPIRATORY_RATE]
    assert evaluate_vital_signs(VisitDraft(respiratory_rate="11")) == [LOW_RESPIRATORY_RATE]


def test_unparseable_values_are_skipped():
    draft = VisitDraft(
        blood_pressure="high",
        heart_rate="fast",
        temperature="warm",
        oxygen_saturation="?",
        respiratory_rate="",
    )
    assert evaluate_vital_signs(draft) == []


def test_evaluation_is_idempotent():
    draft = VisitDraft(
        blood_pressure="160/100",
        heart_rate="120",
        temperature="39",
        oxygen_saturation="90",
        respiratory_rate="24",
        weight="80",
        height="175",
        diagnosis="Malaria",
    )
    
    first = evaluate_visit(draft)
    second = evaluate_visit(draft)
    
    assert set(first.alerts) == set(second.alerts)
    assert len(first.alerts) == 5
    assert first.bmi == second.bmi == 26.1
    assert [m.name for m in first.suggested_medications] == [m.name for m in second.suggested_medications]


def test_blank_diagnosis_clears_suggestions():
    evaluation = evaluate_visit(VisitDraft(diagnosis="   "))
    assert evaluation.suggested_medications == []
    assert evaluation.treatment_instructions is None
