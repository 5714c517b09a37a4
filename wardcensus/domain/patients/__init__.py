# Patients domain module
from wardcensus.domain.patients.models import Patient, Visit

__all__ = [
    "Patient",
    "Visit",
]
