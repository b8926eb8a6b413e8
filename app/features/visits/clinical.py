"""
Derived clinical state for the visit recording form.

Everything here is recomputed from scratch for the current form values and
never raises on partial or malformed input: values that do not parse are
simply skipped.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from app.data.medication_suggestions import MedicationSuggestion, suggest
from app.features.visits.schemas import VisitDraft


_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_BLOOD_PRESSURE = re.compile(r"(\d+)/(\d+)")

ELEVATED_BP = "Elevated blood pressure detected"
LOW_BP = "Low blood pressure detected"
TACHYCARDIA = "Tachycardia detected (HR > 100)"
BRADYCARDIA = "Bradycardia detected (HR < 60)"
FEVER = "Fever detected (>38°C)"
LOW_TEMPERATURE = "Low temperature detected (<36°C)"
LOW_OXYGEN = "Low oxygen saturation (<95%)"
HIGH_RESPIRATORY_RATE = "Elevated respiratory rate (>20)"
LOW_RESPIRATORY_RATE = "Low respiratory rate (<12)"


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of a string ("72 bpm" -> 72), or None."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_float(value: Optional[str]) -> Optional[float]:
    """Leading decimal number of a string ("37.5C" -> 37.5), or None."""
    if not value:
        return None
    match = _LEADING_FLOAT.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_blood_pressure(value: Optional[str]) -> Optional[tuple]:
    """(systolic, diastolic) from a "120/80" style string, or None."""
    if not value:
        return None
    match = _BLOOD_PRESSURE.search(value)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def calculate_bmi(weight: Optional[str], height: Optional[str]) -> Optional[float]:
    """
    Body mass index from weight in kg and height in cm, rounded half-up to
    one decimal. None unless both values are positive numbers.
    """
    weight_kg = parse_float(weight)
    height_cm = parse_float(height)
    
    if weight_kg is None or height_cm is None or weight_kg <= 0 or height_cm <= 0:
        return None
    
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    return math.floor(bmi * 10 + 0.5) / 10


def evaluate_vital_signs(values: VisitDraft) -> List[str]:
    """
    Alerts for every out-of-range vital sign in the form.
    
    Blood pressure raises at most one alert; the elevated check wins when
    systolic and diastolic disagree.
    """
    alerts: List[str] = []
    
    bp = parse_blood_pressure(values.blood_pressure)
    if bp:
        systolic, diastolic = bp
        if systolic > 140 or diastolic > 90:
            alerts.append(ELEVATED_BP)
        elif systolic < 90 or diastolic < 60:
            alerts.append(LOW_BP)
    
    heart_rate = parse_int(values.heart_rate)
    if heart_rate is not None:
        if heart_rate > 100:
            alerts.append(TACHYCARDIA)
        elif heart_rate < 60:
            alerts.append(BRADYCARDIA)
    
    temperature = parse_float(values.temperature)
    if temperature is not None:
        if temperature > 38.0:
            alerts.append(FEVER)
        elif temperature < 36.0:
            alerts.append(LOW_TEMPERATURE)
    
    spo2 = parse_int(values.oxygen_saturation)
    if spo2 is not None and spo2 < 95:
        alerts.append(LOW_OXYGEN)
    
    respiratory_rate = parse_int(values.respiratory_rate)
    if respiratory_rate is not None:
        if respiratory_rate > 20:
            alerts.append(HIGH_RESPIRATORY_RATE)
        elif respiratory_rate < 12:
            alerts.append(LOW_RESPIRATORY_RATE)
    
    return alerts


@dataclass
class VisitEvaluation:
    """Derived state of a visit form at one point in time."""
    bmi: Optional[float] = None
    alerts: List[str] = field(default_factory=list)
    suggested_medications: List[MedicationSuggestion] = field(default_factory=list)
    treatment_instructions: Optional[str] = None


def evaluate_visit(values: VisitDraft) -> VisitEvaluation:
    """BMI, vital-sign alerts and diagnosis suggestions for the current form values."""
    evaluation = VisitEvaluation(
        bmi=calculate_bmi(values.weight, values.height),
        alerts=evaluate_vital_signs(values),
    )
    
    if values.diagnosis.strip():
        medications, instructions = suggest(values.diagnosis)
        evaluation.suggested_medications = medications
        evaluation.treatment_instructions = instructions
    
    return evaluation
