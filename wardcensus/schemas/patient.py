from typing import Optional, List, Dict, Any
from pydantic import BaseModel
from wardcensus.schemas.note import NoteRead


class PatientRead(BaseModel):
    mrn: str
    patient_name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    assigned_doctor: Optional[str] = None

    class Config:
        from_attributes = True


class PatientDetail(BaseModel):
    """Patient page payload.

    ``notes`` is None when the notes fetch failed, in which case
    ``notes_error`` holds the error body; an empty list means no notes.
    """
    patient: PatientRead
    notes: Optional[List[NoteRead]] = None
    notes_error: Optional[Dict[str, Any]] = None
