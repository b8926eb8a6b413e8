"""Static data and mappings."""

from app.data.medication_suggestions import (
    MEDICATION_SUGGESTIONS,
    MedicationSuggestion,
    get_medication_suggestions,
    get_treatment_instructions,
    suggest,
)

__all__ = [
    "MEDICATION_SUGGESTIONS",
    "MedicationSuggestion",
    "get_medication_suggestions",
    "get_treatment_instructions",
    "suggest",
]
