"""Diagnosis-keyed medication suggestions and treatment instructions.

Suggestions are reference material for the prescriber, not medical advice.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class MedicationSuggestion:
    """A commonly prescribed medication for a group of diagnoses."""
    name: str
    dosage: str
    frequency: str
    duration: str
    route: str
    category: str
    keywords: Tuple[str, ...] = field(default_factory=tuple)


# Declaration order is the order suggestions are returned in.
MEDICATION_SUGGESTIONS: List[MedicationSuggestion] = [
    # Infections
    MedicationSuggestion(
        name="Amoxicillin",
        dosage="500mg",
        frequency="Three times daily",
        duration="7 days",
        route="Oral",
        category="Antibiotic",
        keywords=("infection", "bacterial", "pneumonia", "sinusitis", "otitis", "tonsillitis", "strep"),
    ),
    MedicationSuggestion(
        name="Azithromycin",
        dosage="500mg",
        frequency="Once daily",
        duration="3 days",
        route="Oral",
        category="Antibiotic",
        keywords=("respiratory infection", "bronchitis", "pneumonia", "chlamydia"),
    ),
    MedicationSuggestion(
        name="Ciprofloxacin",
        dosage="500mg",
        frequency="Twice daily",
        duration="5 days",
        route="Oral",
        category="Antibiotic",
        keywords=("urinary tract infection", "cystitis", "typhoid", "gastroenteritis"),
    ),
    MedicationSuggestion(
        name="Metronidazole",
        dosage="400mg",
        frequency="Three times daily",
        duration="7 days",
        route="Oral",
        category="Antibiotic",
        keywords=("amoebiasis", "giardiasis", "bacterial vaginosis", "dental abscess"),
    ),
    MedicationSuggestion(
        name="Artemether/Lumefantrine",
        dosage="80/480mg",
        frequency="Twice daily",
        duration="3 days",
        route="Oral",
        category="Antimalarial",
        keywords=("malaria",),
    ),
    # Pain, fever and inflammation
    MedicationSuggestion(
        name="Paracetamol",
        dosage="1g",
        frequency="Every 6 hours as needed",
        duration="5 days",
        route="Oral",
        category="Analgesic",
        keywords=("fever", "pain", "headache", "malaria", "respiratory", "cold", "influenza"),
    ),
    MedicationSuggestion(
        name="Ibuprofen",
        dosage="400mg",
        frequency="Three times daily after meals",
        duration="5 days",
        route="Oral",
        category="NSAID",
        keywords=("pain", "arthritis", "sprain", "back pain", "dysmenorrhea", "inflammation"),
    ),
    # Respiratory and allergy
    MedicationSuggestion(
        name="Cetirizine",
        dosage="10mg",
        frequency="Once daily",
        duration="7 days",
        route="Oral",
        category="Antihistamine",
        keywords=("allergy", "allergic", "rhinitis", "urticaria", "hay fever", "respiratory"),
    ),
    MedicationSuggestion(
        name="Salbutamol Inhaler",
        dosage="100mcg/puff",
        frequency="2 puffs as needed",
        duration="Ongoing",
        route="Inhaled",
        category="Bronchodilator",
        keywords=("asthma", "wheeze", "copd", "bronchospasm"),
    ),
    # Chronic conditions
    MedicationSuggestion(
        name="Amlodipine",
        dosage="5mg",
        frequency="Once daily",
        duration="Ongoing",
        route="Oral",
        category="Antihypertensive",
        keywords=("hypertension", "high blood pressure"),
    ),
    MedicationSuggestion(
        name="Lisinopril",
        dosage="10mg",
        frequency="Once daily",
        duration="Ongoing",
        route="Oral",
        category="Antihypertensive",
        keywords=("hypertension", "high blood pressure", "heart failure"),
    ),
    MedicationSuggestion(
        name="Metformin",
        dosage="500mg",
        frequency="Twice daily with meals",
        duration="Ongoing",
        route="Oral",
        category="Antidiabetic",
        keywords=("diabetes", "type 2 diabetes", "hyperglycemia", "prediabetes"),
    ),
    # Gastrointestinal
    MedicationSuggestion(
        name="Omeprazole",
        dosage="20mg",
        frequency="Once daily before breakfast",
        duration="14 days",
        route="Oral",
        category="Proton pump inhibitor",
        keywords=("gastritis", "gerd", "reflux", "peptic ulcer", "dyspepsia"),
    ),
    MedicationSuggestion(
        name="Oral Rehydration Salts",
        dosage="1 sachet in 1L water",
        frequency="After each loose stool",
        duration="Until diarrhea resolves",
        route="Oral",
        category="Electrolyte replacement",
        keywords=("diarrhea", "diarrhoea", "dehydration", "gastroenteritis"),
    ),
]


# First matching entry wins.
TREATMENT_INSTRUCTIONS: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("respiratory", "cold", "influenza"),
        "Rest, increase fluid intake and use steam inhalation. Return if breathing "
        "becomes difficult or fever persists beyond 3 days.",
    ),
    (
        ("infection", "bacterial"),
        "Complete the full antibiotic course even if symptoms improve. Return if "
        "symptoms worsen after 48 hours.",
    ),
    (
        ("malaria",),
        "Take antimalarials with fatty food, complete the full course and sleep "
        "under a treated net. Seek care urgently for confusion or persistent vomiting.",
    ),
    (
        ("hypertension", "high blood pressure"),
        "Reduce salt intake, exercise regularly and monitor blood pressure at home. "
        "Review in 4 weeks.",
    ),
    (
        ("diabetes", "hyperglycemia"),
        "Follow a low-sugar diet, monitor blood glucose regularly and inspect feet "
        "daily. Review HbA1c in 3 months.",
    ),
    (
        ("diarrhea", "diarrhoea", "gastroenteritis", "dehydration"),
        "Maintain hydration with oral rehydration salts and small frequent meals. "
        "Return if blood appears in stool or the patient cannot keep fluids down.",
    ),
    (
        ("gastritis", "gerd", "reflux", "ulcer", "dyspepsia"),
        "Avoid spicy food, alcohol and late meals. Take medication before breakfast.",
    ),
    (
        ("asthma", "wheeze", "copd"),
        "Avoid known triggers and keep the reliever inhaler at hand. Seek care if "
        "the inhaler is needed more than every 4 hours.",
    ),
]


def _matches(text: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def get_medication_suggestions(diagnosis: str) -> List[MedicationSuggestion]:
    """
    Return every suggestion whose keyword set matches the diagnosis text.
    Matching is case-insensitive substring matching; an empty or unmatched
    diagnosis returns an empty list.
    """
    text = (diagnosis or "").lower().strip()
    if not text:
        return []
    
    return [med for med in MEDICATION_SUGGESTIONS if _matches(text, med.keywords)]


def get_treatment_instructions(diagnosis: str) -> Optional[str]:
    """Instruction note for the diagnosis, or None when nothing matches."""
    text = (diagnosis or "").lower().strip()
    if not text:
        return None
    
    for keywords, instructions in TREATMENT_INSTRUCTIONS:
        if _matches(text, keywords):
            return instructions
    
    return None


def suggest(diagnosis: str) -> Tuple[List[MedicationSuggestion], Optional[str]]:
    """Medication suggestions and instruction note for a diagnosis."""
    return get_medication_suggestions(diagnosis), get_treatment_instructions(diagnosis)


def format_medication(medication: MedicationSuggestion) -> str:
    """Single-line prescription text, e.g. 'Amoxicillin 500mg - Three times daily for 7 days (Oral)'."""
    return (
        f"{medication.name} {medication.dosage} - {medication.frequency} "
        f"for {medication.duration} ({medication.route})"
    )
