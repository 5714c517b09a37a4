"""
Ward-wide constants

The specialty enumeration is the canonical display and iteration order for
both the census and the specialty rosters.
"""

import enum


class Specialty(str, enum.Enum):
    """Recognised ward specialties, in canonical order"""
    GENERAL_INTERNAL_MEDICINE = "General Internal Medicine"
    RESPIRATORY_MEDICINE = "Respiratory Medicine"
    INFECTIOUS_DISEASES = "Infectious Diseases"
    NEUROLOGY = "Neurology"
    GASTROENTEROLOGY = "Gastroenterology"
    RHEUMATOLOGY = "Rheumatology"
    HEMATOLOGY = "Hematology"
    THROMBOSIS_MEDICINE = "Thrombosis Medicine"
    IMMUNOLOGY_ALLERGY = "Immunology & Allergy"


class PatientStatus(str, enum.Enum):
    """Visit status enumeration"""
    ACTIVE = "Active"
    DISCHARGED = "Discharged"


CANONICAL_SPECIALTIES = tuple(specialty.value for specialty in Specialty)
