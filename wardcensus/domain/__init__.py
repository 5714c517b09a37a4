# Register every mapped class so string relationships resolve
from wardcensus.domain.patients.models import Patient, Visit
from wardcensus.domain.notes.models import PatientNote

__all__ = [
    "Patient",
    "Visit",
    "PatientNote",
]
