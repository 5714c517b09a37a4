from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, computed_field, model_validator
import enum

from wardcensus.domain.constants import PatientStatus


class SortKey(str, enum.Enum):
    """Sortable roster columns"""
    PATIENT_NAME = "patient_name"
    MRN = "mrn"
    ADMISSION_DATE = "admission_date"
    DISCHARGE_DATE = "discharge_date"


class SortDirection(str, enum.Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortConfig(BaseModel):
    key: SortKey
    direction: SortDirection = SortDirection.ASCENDING

    class Config:
        frozen = True


class SpecialtyRosterEntry(BaseModel):
    """A visit joined with its patient's name, dates rendered for display"""
    mrn: str
    patient_name: str
    admission_date: str
    discharge_date: Optional[str] = None
    patient_status: str

    # Underlying timestamps, used for chronological date sorting only
    admitted_on: datetime = Field(exclude=True)
    discharged_on: Optional[datetime] = Field(None, exclude=True)

    @model_validator(mode="after")
    def check_discharge_timestamp(self) -> "SpecialtyRosterEntry":
        if (self.discharge_date is None) != (self.discharged_on is None):
            raise ValueError("discharge_date and discharged_on must be given together")
        return self

    @computed_field
    @property
    def status_tone(self) -> str:
        return "green" if self.patient_status == PatientStatus.ACTIVE.value else "red"

    @computed_field
    @property
    def discharge_display(self) -> str:
        return self.discharge_date or "N/A"


class SpecialtyGroup(BaseModel):
    specialty: str
    patients: List[SpecialtyRosterEntry] = []
