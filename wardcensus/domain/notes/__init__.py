# Patient notes domain module
from wardcensus.domain.notes.models import PatientNote

__all__ = [
    "PatientNote",
]
